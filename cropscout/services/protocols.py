"""
Service protocols (structural typing interfaces).

Protocols let consumer services declare the *minimal* surface they depend on
without importing the concrete class, so the external collaborators (economic
calculator, fusion engine, clocks) can be swapped or mocked freely.

Usage
-----
In a consumer service::

    from __future__ import annotations
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from cropscout.services.protocols import EconomicImpactProvider

    class FieldMonitorService:
        def __init__(self, economics: "EconomicImpactProvider", ...): ...

At runtime the concrete ``EconomicCalculator`` already satisfies the protocol
via structural subtyping, no explicit inheritance needed.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from cropscout.domain.detections import DetectionRecord
    from cropscout.domain.economics import EconomicImpact
    from cropscout.domain.field_grid import FieldGrid, GridStats
    from cropscout.domain.fusion import FusionResult
    from cropscout.domain.geo import GeoPoint
    from cropscout.domain.path import SprayPath
    from cropscout.domain.sensors import SensorSnapshot


@runtime_checkable
class PathPlanner(Protocol):
    """Orders infected cells into a round-trip spray mission."""

    name: str

    def plan(self, grid: "FieldGrid", launch_point: "GeoPoint | None" = None) -> "SprayPath":
        """Return a mission starting and ending at ``launch_point``."""
        ...


@runtime_checkable
class EconomicImpactProvider(Protocol):
    """Turns grid statistics into financial metrics."""

    def calculate(self, grid_stats: "GridStats | None") -> "EconomicImpact":
        ...


@runtime_checkable
class FusionProvider(Protocol):
    """Fuses detection records with the current sensor snapshot."""

    def fuse_batch(
        self,
        detections: Sequence["DetectionRecord"],
        sensor_data: "SensorSnapshot | None",
    ) -> list["FusionResult"]:
        ...


class Clock(Protocol):
    """Zero-argument callable returning an aware UTC datetime."""

    def __call__(self) -> datetime:
        ...
