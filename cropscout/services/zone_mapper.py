"""
Zone Mapper
===========
Maps detection records onto a fresh field grid and finds contiguous
infected clusters.

Every call rebuilds the grid from the full detection list, so the result
does not depend on arrival order and never mutates an earlier grid.
"""

from __future__ import annotations

import logging
from typing import Iterable

from cropscout.domain.detections import DetectionRecord
from cropscout.domain.field_grid import FieldGrid, FieldGridConfig, GridCell, create_field_grid, find_cell_for_point
from cropscout.domain.zones import ZoneStatistics

logger = logging.getLogger(__name__)

# North, South, West, East
_NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def map_detections_to_grid(
    detections: Iterable[DetectionRecord] | None,
    config: FieldGridConfig | None = None,
) -> FieldGrid:
    """
    Build a grid and mark every cell that received at least one detection.

    Records without GPS, or with GPS outside the field, are skipped.
    """
    grid = create_field_grid(config)
    skipped = 0

    for record in detections or ():
        if record.gps is None:
            skipped += 1
            continue
        cell = find_cell_for_point(record.gps, grid)
        if cell is None:
            logger.debug("Detection %s at %s lies outside the field", record.id, record.gps)
            skipped += 1
            continue
        cell.detection_ids.append(record.id)
        cell.infected = True

    if skipped:
        logger.debug("Skipped %d detection(s) without a usable GPS fix", skipped)
    return grid


def identify_infected_zones(grid: FieldGrid) -> list[list[GridCell]]:
    """
    Group infected cells into 4-connected clusters (no diagonals).

    Uses an explicit stack so large grids cannot hit the recursion limit.
    Zones are returned in row-major order of their first cell.
    """
    zones: list[list[GridCell]] = []
    visited: set[tuple[int, int]] = set()
    n_rows, n_cols = grid.n_rows, grid.n_cols

    for start in grid.cells():
        if not start.infected or (start.row, start.col) in visited:
            continue

        zone: list[GridCell] = []
        stack = [(start.row, start.col)]
        visited.add((start.row, start.col))
        while stack:
            row, col = stack.pop()
            zone.append(grid.cell(row, col))
            # Reversed so the northern neighbour is popped first
            for d_row, d_col in reversed(_NEIGHBOUR_OFFSETS):
                n_row, n_col = row + d_row, col + d_col
                if not (0 <= n_row < n_rows and 0 <= n_col < n_cols):
                    continue
                if (n_row, n_col) in visited or not grid.cell(n_row, n_col).infected:
                    continue
                visited.add((n_row, n_col))
                stack.append((n_row, n_col))

        zones.append(zone)

    return zones


def get_zone_statistics(zones: list[list[GridCell]]) -> ZoneStatistics:
    if not zones:
        return ZoneStatistics()

    sizes = [len(zone) for zone in zones]
    total = sum(sizes)
    return ZoneStatistics(
        zone_count=len(zones),
        total_infected_cells=total,
        average_zone_size=round(total / len(zones), 1),
        largest_zone=max(sizes),
    )
