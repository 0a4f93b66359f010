"""
Field Grid
==========
Partitions the monitored field into an R x C matrix of cells.

Row 0 is the northern edge and column 0 the western edge. Cell edges are
computed once per axis and shared by neighbouring cells, so the cells tile
the field rectangle without gaps or overlaps and the same configuration
always yields bit-identical bounds.

The grid is rebuilt from scratch for every detection set; only
``detection_ids`` and ``infected`` are ever mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from cropscout.constants import COORDINATE_PRECISION, FieldDefaults
from cropscout.domain.exceptions import ConfigurationError
from cropscout.domain.geo import CellBounds, GeoPoint, field_bounds, is_point_in_bounds


@dataclass(frozen=True)
class FieldGridConfig:
    """
    Immutable grid geometry.

    Attributes:
        rows: Number of north-south divisions
        cols: Number of east-west divisions
        center: Field centre, also the drone launch point
        lat_delta: Field height in degrees of latitude
        lng_delta: Field width in degrees of longitude
    """

    rows: int = FieldDefaults.GRID_ROWS
    cols: int = FieldDefaults.GRID_COLS
    center: GeoPoint = field(default_factory=lambda: GeoPoint(FieldDefaults.CENTER_LAT, FieldDefaults.CENTER_LNG))
    lat_delta: float = FieldDefaults.LAT_DELTA
    lng_delta: float = FieldDefaults.LNG_DELTA

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError(f"Grid must have at least one row and column, got {self.rows}x{self.cols}")
        if self.lat_delta <= 0 or self.lng_delta <= 0:
            raise ConfigurationError(
                f"Field extents must be positive, got lat_delta={self.lat_delta} lng_delta={self.lng_delta}"
            )

    @property
    def bounds(self) -> CellBounds:
        return field_bounds(self.center, self.lat_delta, self.lng_delta)


@dataclass
class GridCell:
    """One field cell and the detections mapped into it."""

    row: int
    col: int
    id: str
    center: GeoPoint
    bounds: CellBounds
    detection_ids: list[str] = field(default_factory=list)
    infected: bool = False

    @property
    def detection_count(self) -> int:
        return len(self.detection_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "id": self.id,
            "center": self.center.to_dict(),
            "bounds": self.bounds.to_list(),
            "detection_ids": list(self.detection_ids),
            "infected": self.infected,
        }


@dataclass
class FieldGrid:
    """Row-major matrix of :class:`GridCell`."""

    config: FieldGridConfig
    rows: list[list[GridCell]]

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def cell(self, row: int, col: int) -> GridCell:
        return self.rows[row][col]

    def cells(self) -> Iterator[GridCell]:
        """Iterate all cells in row-major order."""
        for grid_row in self.rows:
            yield from grid_row

    def infected_cells(self) -> list[GridCell]:
        return [cell for cell in self.cells() if cell.infected]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.n_rows,
            "cols": self.n_cols,
            "center": self.config.center.to_dict(),
            "bounds": self.config.bounds.to_list(),
            "cells": [[cell.to_dict() for cell in grid_row] for grid_row in self.rows],
        }


@dataclass(frozen=True)
class GridStats:
    """Infection summary derived from a grid; recomputed on every query."""

    total_cells: int
    infected_count: int
    healthy_count: int
    infected_percentage: float
    healthy_percentage: float
    chemical_savings: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_cells": self.total_cells,
            "infected_count": self.infected_count,
            "healthy_count": self.healthy_count,
            "infected_percentage": self.infected_percentage,
            "healthy_percentage": self.healthy_percentage,
            "chemical_savings": self.chemical_savings,
        }


def create_field_grid(config: FieldGridConfig | None = None) -> FieldGrid:
    """Build an empty grid covering the configured field."""
    config = config or FieldGridConfig()
    outer = config.bounds

    # Shared edges: lat_edges[r] is the north edge of row r and the south edge of row r-1
    lat_edges = [outer.north - config.lat_delta * i / config.rows for i in range(config.rows + 1)]
    lng_edges = [outer.west + config.lng_delta * j / config.cols for j in range(config.cols + 1)]
    # Outer edges come from the field bounds so the cells cover the whole field
    lat_edges[0], lat_edges[-1] = outer.north, outer.south
    lng_edges[0], lng_edges[-1] = outer.west, outer.east

    rows: list[list[GridCell]] = []
    for row in range(config.rows):
        north, south = lat_edges[row], lat_edges[row + 1]
        grid_row = []
        for col in range(config.cols):
            west, east = lng_edges[col], lng_edges[col + 1]
            center = GeoPoint(
                lat=round((north + south) / 2, COORDINATE_PRECISION),
                lng=round((west + east) / 2, COORDINATE_PRECISION),
            )
            grid_row.append(
                GridCell(
                    row=row,
                    col=col,
                    id=f"{row}_{col}",
                    center=center,
                    bounds=CellBounds(south=south, west=west, north=north, east=east),
                )
            )
        rows.append(grid_row)

    return FieldGrid(config=config, rows=rows)


def is_point_in_cell(point: GeoPoint, cell: GridCell) -> bool:
    """Inclusive bounds check against a single cell."""
    return is_point_in_bounds(point, cell.bounds)


def find_cell_for_point(point: GeoPoint, grid: FieldGrid) -> GridCell | None:
    """
    Return the first cell containing ``point`` in row-major order, or None.

    A point on an edge shared by two cells belongs to whichever comes first
    in the scan (the northern / western one).
    """
    for cell in grid.cells():
        if is_point_in_cell(point, cell):
            return cell
    return None


def flatten_grid(grid: FieldGrid) -> list[GridCell]:
    return list(grid.cells())


def get_infected_cells(grid: FieldGrid) -> list[GridCell]:
    return grid.infected_cells()


def calculate_grid_stats(grid: FieldGrid) -> GridStats:
    """Count infected vs. total cells; percentages rounded to one decimal."""
    total_cells = 0
    infected_count = 0
    for cell in grid.cells():
        total_cells += 1
        if cell.infected:
            infected_count += 1

    healthy_count = total_cells - infected_count
    if total_cells:
        infected_percentage = round(infected_count / total_cells * 100, 1)
        healthy_percentage = round(healthy_count / total_cells * 100, 1)
    else:
        infected_percentage = 0.0
        healthy_percentage = 0.0

    return GridStats(
        total_cells=total_cells,
        infected_count=infected_count,
        healthy_count=healthy_count,
        infected_percentage=infected_percentage,
        healthy_percentage=healthy_percentage,
        chemical_savings=healthy_percentage,
    )
