import math
import random

import pytest

from cropscout.domain.exceptions import ConfigurationError, ValidationError
from cropscout.domain.field_grid import FieldGridConfig, create_field_grid
from cropscout.domain.geo import GeoPoint, haversine_distance
from cropscout.services.path_planner import (
    NearestNeighborPlanner,
    SweepPlanner,
    generate_spray_path,
    generate_sweep_path,
    get_path_coordinates,
    get_planner,
    route_distance,
)
from cropscout.services.protocols import PathPlanner


def _grid_with(infected, rows=10, cols=10):
    grid = create_field_grid(FieldGridConfig(rows=rows, cols=cols))
    for row, col in infected:
        grid.cell(row, col).infected = True
        grid.cell(row, col).detection_ids.append(f"d{row}{col}")
    return grid


@pytest.mark.parametrize("plan", [generate_spray_path, generate_sweep_path])
def test_no_infected_cells_gives_no_path(plan):
    path = plan(create_field_grid())
    assert path.path_exists is False
    assert path.waypoints == []
    assert path.total_distance_meters == 0
    assert path.estimated_time_seconds == 0
    assert get_path_coordinates(path) == []


@pytest.mark.parametrize("plan", [generate_spray_path, generate_sweep_path])
def test_path_visits_each_infected_cell_once(plan):
    rng = random.Random(7)
    cells = {(rng.randrange(10), rng.randrange(10)) for _ in range(30)}
    grid = _grid_with(cells)

    path = plan(grid)
    visited = [wp.cell_id for wp in path.waypoints]
    assert sorted(visited) == sorted(f"{r}_{c}" for r, c in cells)
    assert len(visited) == len(set(visited))
    assert path.start_point == grid.config.center
    assert path.end_point == grid.config.center


@pytest.mark.parametrize("plan", [generate_spray_path, generate_sweep_path])
def test_total_distance_matches_waypoint_sequence(plan):
    grid = _grid_with([(0, 0), (9, 9), (3, 6), (7, 2)])
    path = plan(grid)

    legs = [path.start_point] + [wp.position for wp in path.waypoints] + [path.end_point]
    expected = sum(haversine_distance(a, b) for a, b in zip(legs, legs[1:]))
    assert math.isclose(path.total_distance_meters, expected, rel_tol=1e-12)


def test_time_estimate():
    grid = _grid_with([(0, 0), (9, 9)])
    path = generate_spray_path(grid)
    expected = math.ceil(path.total_distance_meters / 5 + 2 * 3)
    assert path.estimated_time_seconds == expected


def test_nearest_neighbor_goes_to_closest_first():
    grid = _grid_with([(0, 0), (5, 5), (9, 9)])
    # Cell 5_5 sits right next to the field centre
    path = generate_spray_path(grid)
    assert path.waypoints[0].cell_id == "5_5"


def test_sweep_visits_in_scan_order():
    grid = _grid_with([(9, 0), (0, 9), (4, 4), (0, 1)])
    path = generate_sweep_path(grid)
    assert [wp.cell_id for wp in path.waypoints] == ["0_1", "0_9", "4_4", "9_0"]


def test_custom_launch_point():
    grid = _grid_with([(0, 0)])
    launch = grid.cell(0, 0).bounds
    launch_point = GeoPoint(launch.north, launch.west)
    path = generate_spray_path(grid, launch_point)

    assert path.start_point == launch_point
    assert get_path_coordinates(path)[0] == [launch_point.lat, launch_point.lng]
    assert get_path_coordinates(path)[-1] == [launch_point.lat, launch_point.lng]
    assert len(get_path_coordinates(path)) == 3


def test_route_distance_without_waypoints():
    assert route_distance(GeoPoint(0, 0), []) == 0.0


def test_get_planner_by_name():
    planner = get_planner("SWEEP", speed_mps=8.0)
    assert isinstance(planner, SweepPlanner)
    assert isinstance(planner, PathPlanner)
    assert planner.speed_mps == 8.0
    assert isinstance(get_planner(), NearestNeighborPlanner)


def test_get_planner_unknown_strategy():
    with pytest.raises(ValidationError):
        get_planner("spiral")


def test_planner_rejects_bad_speed():
    with pytest.raises(ConfigurationError):
        NearestNeighborPlanner(speed_mps=0)
    with pytest.raises(ConfigurationError):
        SweepPlanner(spray_seconds_per_cell=-1)


def test_to_dict_rounds_distance_only_on_output():
    grid = _grid_with([(0, 0), (9, 9)])
    path = generate_spray_path(grid)
    data = path.to_dict()
    assert data["total_distance_meters"] == round(path.total_distance_meters, 1)
    assert data["strategy"] == "nearest_neighbor"
    assert data["path_exists"] is True
