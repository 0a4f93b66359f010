"""
Geospatial Primitives
=====================
GPS points, great-circle distance and axis-aligned bounds tests.

Bounds are plain lat/lng rectangles without geodesic correction, which is
accurate enough for fields under a kilometre across.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from cropscout.constants import EARTH_RADIUS_METERS


@dataclass(frozen=True)
class GeoPoint:
    """WGS84 coordinate in decimal degrees."""

    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    def as_pair(self) -> list[float]:
        return [self.lat, self.lng]


@dataclass(frozen=True)
class CellBounds:
    """Axis-aligned rectangle: south <= lat <= north, west <= lng <= east."""

    south: float
    west: float
    north: float
    east: float

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lng_span(self) -> float:
        return self.east - self.west

    @property
    def area_deg2(self) -> float:
        return self.lat_span * self.lng_span

    def to_list(self) -> list[list[float]]:
        """``[[south, west], [north, east]]`` as map libraries expect."""
        return [[self.south, self.west], [self.north, self.east]]


def haversine_distance(p1: GeoPoint, p2: GeoPoint) -> float:
    """Great-circle distance between two points in metres."""
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    delta_lat = math.radians(p2.lat - p1.lat)
    delta_lng = math.radians(p2.lng - p1.lng)

    a = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_point_in_bounds(point: GeoPoint, bounds: CellBounds) -> bool:
    """Inclusive on all four edges, so a point on a shared edge matches both neighbours."""
    return bounds.south <= point.lat <= bounds.north and bounds.west <= point.lng <= bounds.east


def field_bounds(center: GeoPoint, lat_delta: float, lng_delta: float) -> CellBounds:
    """Rectangle of the given angular extents centred on ``center``."""
    return CellBounds(
        south=center.lat - lat_delta / 2,
        west=center.lng - lng_delta / 2,
        north=center.lat + lat_delta / 2,
        east=center.lng + lng_delta / 2,
    )
