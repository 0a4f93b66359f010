"""
Spray Path Planner
==================
Turns the infected cells of a field grid into a round-trip drone mission
from the launch point.

Strategies
----------
nearest_neighbor
    Greedy tour: always fly to the closest unvisited infected cell
    (great-circle distance). O(n^2) in the number of infected cells, which
    is bounded by the grid size. Ties go to the cell found first in
    row-major order.
sweep
    Visit infected cells in grid scan order (north to south, west to east).

Both share the same accounting: travel time at the drone speed plus a fixed
hover time per waypoint, rounded up to whole seconds.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from cropscout.constants import PathDefaults
from cropscout.domain.exceptions import ConfigurationError, ValidationError
from cropscout.domain.field_grid import FieldGrid, GridCell
from cropscout.domain.geo import GeoPoint, haversine_distance
from cropscout.domain.path import SprayPath, Waypoint
from cropscout.enums import PathStrategy
from cropscout.services.protocols import PathPlanner

logger = logging.getLogger(__name__)


def route_distance(launch_point: GeoPoint, waypoints: Sequence[Waypoint]) -> float:
    """Length of launch -> waypoints... -> launch in metres."""
    total = 0.0
    current = launch_point
    for waypoint in waypoints:
        total += haversine_distance(current, waypoint.position)
        current = waypoint.position
    if waypoints:
        total += haversine_distance(current, launch_point)
    return total


class _BasePlanner:
    """Shared distance/time accounting; subclasses only decide the visiting order."""

    name = ""

    def __init__(
        self,
        speed_mps: float = PathDefaults.DRONE_SPEED_MPS,
        spray_seconds_per_cell: float = PathDefaults.SPRAY_SECONDS_PER_CELL,
    ):
        if speed_mps <= 0:
            raise ConfigurationError(f"Drone speed must be positive, got {speed_mps}")
        if spray_seconds_per_cell < 0:
            raise ConfigurationError(f"Spray time cannot be negative, got {spray_seconds_per_cell}")
        self.speed_mps = speed_mps
        self.spray_seconds_per_cell = spray_seconds_per_cell

    def order(self, cells: list[GridCell], launch_point: GeoPoint) -> list[GridCell]:
        raise NotImplementedError

    def plan(self, grid: FieldGrid, launch_point: GeoPoint | None = None) -> SprayPath:
        infected = grid.infected_cells()
        if not infected:
            return SprayPath(strategy=self.name)

        launch_point = launch_point or grid.config.center
        waypoints = [
            Waypoint(cell_id=cell.id, position=cell.center, detection_count=cell.detection_count)
            for cell in self.order(infected, launch_point)
        ]
        total_distance = route_distance(launch_point, waypoints)
        travel_time = total_distance / self.speed_mps
        spray_time = len(waypoints) * self.spray_seconds_per_cell

        path = SprayPath(
            waypoints=waypoints,
            total_distance_meters=total_distance,
            estimated_time_seconds=math.ceil(travel_time + spray_time),
            path_exists=True,
            start_point=launch_point,
            end_point=launch_point,
            strategy=self.name,
        )
        logger.debug(
            "Planned %s path: %d waypoints, %.1f m, %d s",
            self.name,
            len(waypoints),
            total_distance,
            path.estimated_time_seconds,
        )
        return path


class NearestNeighborPlanner(_BasePlanner):
    name = PathStrategy.NEAREST_NEIGHBOR.value

    def order(self, cells: list[GridCell], launch_point: GeoPoint) -> list[GridCell]:
        unvisited = list(cells)
        ordered: list[GridCell] = []
        current = launch_point

        while unvisited:
            nearest_index = 0
            shortest = math.inf
            for index, cell in enumerate(unvisited):
                distance = haversine_distance(current, cell.center)
                if distance < shortest:
                    shortest = distance
                    nearest_index = index
            nearest = unvisited.pop(nearest_index)
            ordered.append(nearest)
            current = nearest.center

        return ordered


class SweepPlanner(_BasePlanner):
    name = PathStrategy.SWEEP.value

    def order(self, cells: list[GridCell], launch_point: GeoPoint) -> list[GridCell]:
        return sorted(cells, key=lambda cell: (cell.row, cell.col))


PLANNERS: dict[str, type[_BasePlanner]] = {
    NearestNeighborPlanner.name: NearestNeighborPlanner,
    SweepPlanner.name: SweepPlanner,
}


def get_planner(
    strategy: str | PathStrategy = PathStrategy.NEAREST_NEIGHBOR,
    **kwargs,
) -> PathPlanner:
    """Instantiate a planner by strategy name."""
    key = strategy.value if isinstance(strategy, PathStrategy) else str(strategy).lower()
    planner_cls = PLANNERS.get(key)
    if planner_cls is None:
        raise ValidationError(
            f"Unknown path strategy '{strategy}'",
            detail={"available": sorted(PLANNERS)},
        )
    return planner_cls(**kwargs)


def generate_spray_path(grid: FieldGrid, launch_point: GeoPoint | None = None) -> SprayPath:
    return NearestNeighborPlanner().plan(grid, launch_point)


def generate_sweep_path(grid: FieldGrid, launch_point: GeoPoint | None = None) -> SprayPath:
    return SweepPlanner().plan(grid, launch_point)


def get_path_coordinates(path: SprayPath) -> list[list[float]]:
    """``[lat, lng]`` polyline: launch, each waypoint, back to launch."""
    if not path.path_exists or path.start_point is None or path.end_point is None:
        return []
    coords = [path.start_point.as_pair()]
    coords.extend(waypoint.position.as_pair() for waypoint in path.waypoints)
    coords.append(path.end_point.as_pair())
    return coords
