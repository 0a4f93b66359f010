"""
Infected Zone Domain Objects
============================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ZoneStatistics:
    """Summary over contiguous infected clusters."""

    zone_count: int = 0
    total_infected_cells: int = 0
    average_zone_size: float = 0.0
    largest_zone: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
