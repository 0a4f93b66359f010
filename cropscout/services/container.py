from __future__ import annotations

import logging
from dataclasses import dataclass

from cropscout.config import AppConfig
from cropscout.services.alert_pipeline import AlertPipeline
from cropscout.services.debouncer import AlertDebouncer
from cropscout.services.economic_calculator import EconomicCalculator
from cropscout.services.field_monitor import FieldMonitorService
from cropscout.services.fusion_engine import FusionEngine
from cropscout.services.path_planner import get_planner
from cropscout.services.sensor_simulator import SensorSimulator

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage the field monitoring services."""

    config: AppConfig
    debouncer: AlertDebouncer
    alert_pipeline: AlertPipeline
    economic_calculator: EconomicCalculator
    fusion_engine: FusionEngine
    sensor_simulator: SensorSimulator
    field_monitor: FieldMonitorService

    @classmethod
    def build(cls, config: AppConfig) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
        """
        logger.info("Building ServiceContainer...")
        debouncer = AlertDebouncer(window_seconds=config.alert_debounce_seconds)
        alert_pipeline = AlertPipeline(debouncer=debouncer)
        economic_calculator = EconomicCalculator()
        fusion_engine = FusionEngine()
        planner = get_planner(
            config.path_strategy,
            speed_mps=config.drone_speed_mps,
            spray_seconds_per_cell=config.spray_seconds_per_cell,
        )
        field_monitor = FieldMonitorService(
            grid_config=config.grid_config(),
            pipeline=alert_pipeline,
            economics=economic_calculator,
            fusion=fusion_engine,
            planner=planner,
            sensor_max_age_minutes=config.sensor_max_age_minutes,
        )
        container = cls(
            config=config,
            debouncer=debouncer,
            alert_pipeline=alert_pipeline,
            economic_calculator=economic_calculator,
            fusion_engine=fusion_engine,
            sensor_simulator=SensorSimulator(),
            field_monitor=field_monitor,
        )
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Drop in-memory alert state before process exit."""
        self.debouncer.reset()
        logger.info("ServiceContainer shutdown complete.")
