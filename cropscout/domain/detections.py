"""
Detection Domain Objects
========================
Drone vision detections as delivered by the real-time detection feed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cropscout.domain.geo import GeoPoint


@dataclass(frozen=True)
class Detection:
    """A single classified object inside a frame."""

    class_name: str
    confidence: float = 0.5

    def to_dict(self) -> dict[str, Any]:
        return {"class_name": self.class_name, "confidence": self.confidence}


@dataclass(frozen=True)
class DetectionRecord:
    """One analysed drone frame; records without ``gps`` are never mapped to the grid."""

    id: str
    gps: GeoPoint | None = None
    timestamp: str | None = None
    detections: tuple[Detection, ...] = field(default_factory=tuple)
    detection_count: int = 0

    @property
    def primary_detection(self) -> Detection | None:
        return self.detections[0] if self.detections else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gps": self.gps.to_dict() if self.gps else None,
            "timestamp": self.timestamp,
            "detections": [d.to_dict() for d in self.detections],
            "detection_count": self.detection_count,
        }
