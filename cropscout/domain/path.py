"""
Spray Path Domain Objects
=========================
Ephemeral mission plans; recomputed on every planning request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cropscout.domain.geo import GeoPoint


@dataclass(frozen=True)
class Waypoint:
    """A stop over one infected cell, in visiting order."""

    cell_id: str
    position: GeoPoint
    detection_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "cell_id": self.cell_id,
            "position": self.position.to_dict(),
            "detection_count": self.detection_count,
        }


@dataclass(frozen=True)
class SprayPath:
    """
    Round-trip drone mission from and back to the launch point.

    ``path_exists`` is False (with no waypoints and zero totals) exactly when
    there is nothing to spray.
    """

    waypoints: list[Waypoint] = field(default_factory=list)
    total_distance_meters: float = 0.0
    estimated_time_seconds: int = 0
    path_exists: bool = False
    start_point: GeoPoint | None = None
    end_point: GeoPoint | None = None
    strategy: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "waypoints": [wp.to_dict() for wp in self.waypoints],
            "total_distance_meters": round(self.total_distance_meters, 1),
            "estimated_time_seconds": self.estimated_time_seconds,
            "path_exists": self.path_exists,
            "start_point": self.start_point.to_dict() if self.start_point else None,
            "end_point": self.end_point.to_dict() if self.end_point else None,
            "strategy": self.strategy,
        }
