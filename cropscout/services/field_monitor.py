"""
Field Monitor Service
=====================
Runs one complete recomputation cycle whenever the detection set or the
sensor snapshot changes:

    detections -> grid -> stats / zones -> economics -> fusion
               -> alert pipeline -> spray path

Nothing is cached between cycles except the alert debouncer inside the
pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Sequence

from cropscout.domain.detections import DetectionRecord
from cropscout.domain.economics import EconomicImpact
from cropscout.domain.field_grid import FieldGrid, FieldGridConfig, GridCell, GridStats, calculate_grid_stats
from cropscout.domain.fusion import FusionResult
from cropscout.domain.geo import GeoPoint
from cropscout.domain.path import SprayPath
from cropscout.domain.sensors import SensorSnapshot, check_sensor_freshness
from cropscout.domain.zones import ZoneStatistics
from cropscout.enums import PathStrategy
from cropscout.services.alert_pipeline import AlertPipeline, AlertPipelineResult
from cropscout.services.economic_calculator import EconomicCalculator
from cropscout.services.fusion_engine import FusionEngine, get_fusion_stats
from cropscout.services.fusion_path_planner import FusionAwarePlan, generate_fusion_aware_path
from cropscout.services.path_planner import get_path_coordinates, get_planner
from cropscout.services.zone_mapper import get_zone_statistics, identify_infected_zones, map_detections_to_grid
from cropscout.utils.time import utc_now

if TYPE_CHECKING:
    from cropscout.services.protocols import EconomicImpactProvider, FusionProvider, PathPlanner

logger = logging.getLogger(__name__)


@dataclass
class FieldSnapshot:
    """Everything derived from one (detections, sensor snapshot) input."""

    grid: FieldGrid
    stats: GridStats
    zones: list[list[GridCell]]
    zone_statistics: ZoneStatistics
    economic_impact: EconomicImpact
    fusion_results: list[FusionResult]
    fusion_plan: FusionAwarePlan
    alerts: AlertPipelineResult
    path: SprayPath
    sensor_data: SensorSnapshot | None = None
    sensor_warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.stats.to_dict(),
            "zones": [[cell.id for cell in zone] for zone in self.zones],
            "zone_statistics": self.zone_statistics.to_dict(),
            "economic_impact": self.economic_impact.to_dict(),
            "fusion": {
                "results": [r.to_dict() for r in self.fusion_results],
                "stats": get_fusion_stats(self.fusion_results),
                "plan": self.fusion_plan.to_dict(),
            },
            "signals": self.alerts.signals.to_dict(),
            "alerts": [a.to_dict() for a in self.alerts.emitted],
            "suppressed_alerts": len(self.alerts.resolved) - len(self.alerts.emitted),
            "path": self.path.to_dict(),
            "path_coordinates": get_path_coordinates(self.path),
            "sensor_data": self.sensor_data.to_dict() if self.sensor_data else None,
            "sensor_warnings": list(self.sensor_warnings),
        }


class FieldMonitorService:
    """
    Field-level orchestration over the grid, economics, fusion, alert and
    path planning services.

    Args:
        grid_config: Field extents and grid resolution
        pipeline: Alert pipeline; owns the debouncer shared by every cycle
        economics: Economic impact provider
        fusion: Vision + sensor fusion provider
        planner: Default spray path planner
        sensor_max_age_minutes: Snapshots older than this add a warning
    """

    def __init__(
        self,
        grid_config: FieldGridConfig | None = None,
        pipeline: AlertPipeline | None = None,
        economics: "EconomicImpactProvider | None" = None,
        fusion: "FusionProvider | None" = None,
        planner: "PathPlanner | None" = None,
        sensor_max_age_minutes: float | None = None,
    ) -> None:
        self.grid_config = grid_config or FieldGridConfig()
        self.pipeline = pipeline or AlertPipeline()
        self.economics = economics or EconomicCalculator()
        self.fusion = fusion or FusionEngine()
        self.planner = planner or get_planner(PathStrategy.NEAREST_NEIGHBOR)
        self.sensor_max_age_minutes = sensor_max_age_minutes

    def build_grid(self, detections: Sequence[DetectionRecord] | None) -> FieldGrid:
        return map_detections_to_grid(detections, self.grid_config)

    def plan_path(
        self,
        grid: FieldGrid,
        *,
        strategy: str | PathStrategy | None = None,
        launch_point: GeoPoint | None = None,
    ) -> SprayPath:
        planner = self.planner
        if strategy is not None and str(strategy) != planner.name:
            planner = get_planner(
                strategy,
                speed_mps=getattr(self.planner, "speed_mps"),
                spray_seconds_per_cell=getattr(self.planner, "spray_seconds_per_cell"),
            )
        return planner.plan(grid, launch_point)

    def _sensor_warnings(self, sensor_data: SensorSnapshot | None, now: datetime) -> list[str]:
        if sensor_data is None:
            return ["No sensor data - environmental rules use default readings"]
        kwargs: dict[str, Any] = {"now": now}
        if self.sensor_max_age_minutes is not None:
            kwargs["max_age_minutes"] = self.sensor_max_age_minutes
        freshness = check_sensor_freshness(sensor_data, **kwargs)
        return [freshness.warning] if not freshness.fresh and freshness.warning else []

    def evaluate(
        self,
        detections: Sequence[DetectionRecord] | None,
        sensor_data: SensorSnapshot | None = None,
        *,
        strategy: str | PathStrategy | None = None,
        now: datetime | None = None,
    ) -> FieldSnapshot:
        """Run the full cycle for the current inputs."""
        now = now or utc_now()
        records = list(detections or ())

        grid = self.build_grid(records)
        stats = calculate_grid_stats(grid)
        zones = identify_infected_zones(grid)
        economic_impact = self.economics.calculate(stats)
        fusion_results = self.fusion.fuse_batch(records, sensor_data)
        fusion_plan = generate_fusion_aware_path(grid, records, sensor_data)
        alerts = self.pipeline.run(records, stats, economic_impact, fusion_results, sensor_data, now=now)
        path = self.plan_path(grid, strategy=strategy)

        logger.info(
            "Field cycle: %d detection(s), %d/%d cells infected, %d zone(s), %d alert(s) emitted",
            len(records),
            stats.infected_count,
            stats.total_cells,
            len(zones),
            len(alerts.emitted),
        )
        return FieldSnapshot(
            grid=grid,
            stats=stats,
            zones=zones,
            zone_statistics=get_zone_statistics(zones),
            economic_impact=economic_impact,
            fusion_results=fusion_results,
            fusion_plan=fusion_plan,
            alerts=alerts,
            path=path,
            sensor_data=sensor_data,
            sensor_warnings=self._sensor_warnings(sensor_data, now),
        )

    def reset_alerts(self) -> None:
        self.pipeline.reset()
