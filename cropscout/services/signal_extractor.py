"""
Signal Extractor
================
Flattens grid statistics, economic output, fusion diagnoses and the sensor
snapshot into the :class:`Signals` record the alert rules read.

Every source is optional; anything missing keeps its default. The infection
growth rate is a static heuristic on the current infection level, not a
trend computed from history.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cropscout.constants import GrowthHeuristic, SignalDefaults
from cropscout.domain.detections import DetectionRecord
from cropscout.domain.economics import EconomicImpact
from cropscout.domain.field_grid import GridStats
from cropscout.domain.fusion import FusionResult
from cropscout.domain.sensors import SensorSnapshot
from cropscout.domain.signals import Signals
from cropscout.utils.time import iso_now

logger = logging.getLogger(__name__)


def estimate_growth_rate(infection_percentage: float) -> float:
    """Infection spread in %/hour: 15% of the level above 15%, 10% above 5%, else 0."""
    if infection_percentage > GrowthHeuristic.HIGH_THRESHOLD:
        return infection_percentage * GrowthHeuristic.HIGH_FACTOR
    if infection_percentage > GrowthHeuristic.MODERATE_THRESHOLD:
        return infection_percentage * GrowthHeuristic.MODERATE_FACTOR
    return 0.0


def _reading(value: float | None, default: float) -> float:
    return default if value is None else float(value)


def extract_signals(
    detections: Sequence[DetectionRecord] | None = None,
    grid_stats: GridStats | None = None,
    economic_impact: EconomicImpact | None = None,
    fusion_results: Sequence[FusionResult] | None = None,
    sensor_data: SensorSnapshot | None = None,
    *,
    timestamp: str | None = None,
) -> Signals:
    """
    Build the signal snapshot for one evaluation cycle.

    ``detections`` are already reflected in ``grid_stats``; they are accepted
    so callers can hand over the whole cycle input unchanged.
    """
    infection_percentage = SignalDefaults.INFECTION_PERCENTAGE
    infected_count = 0
    total_cells = 0
    if grid_stats is not None:
        infection_percentage = grid_stats.infected_percentage or 0.0
        infected_count = grid_stats.infected_count or 0
        total_cells = grid_stats.total_cells or 0

    roi_ratio = SignalDefaults.ROI_RATIO
    potential_loss = SignalDefaults.POTENTIAL_LOSS
    if economic_impact is not None and economic_impact.roi:
        roi_ratio = economic_impact.roi_ratio
        potential_loss = economic_impact.potential_loss or 0.0

    fusion_severity = SignalDefaults.FUSION_SEVERITY
    fusion_diagnosis = SignalDefaults.FUSION_DIAGNOSIS
    fusion_confidence = SignalDefaults.FUSION_CONFIDENCE
    if fusion_results:
        # Only the most recent result counts
        latest = fusion_results[-1].diagnosis
        if latest is not None:
            fusion_severity = latest.severity or SignalDefaults.FUSION_SEVERITY
            fusion_diagnosis = latest.refined_diagnosis or SignalDefaults.FUSION_DIAGNOSIS
            fusion_confidence = latest.confidence or SignalDefaults.FUSION_CONFIDENCE

    soil_moisture = SignalDefaults.SOIL_MOISTURE
    soil_temperature = SignalDefaults.SOIL_TEMPERATURE
    air_humidity = SignalDefaults.AIR_HUMIDITY
    if sensor_data is not None:
        soil_moisture = _reading(sensor_data.soil_moisture, SignalDefaults.SOIL_MOISTURE)
        soil_temperature = _reading(sensor_data.soil_temperature, SignalDefaults.SOIL_TEMPERATURE)
        air_humidity = _reading(sensor_data.air_humidity, SignalDefaults.AIR_HUMIDITY)

    signals = Signals(
        infection_percentage=infection_percentage,
        infected_count=infected_count,
        total_cells=total_cells,
        roi_ratio=roi_ratio,
        potential_loss=potential_loss,
        soil_moisture=soil_moisture,
        soil_temperature=soil_temperature,
        air_humidity=air_humidity,
        fusion_severity=fusion_severity,
        fusion_diagnosis=fusion_diagnosis,
        fusion_confidence=fusion_confidence,
        infection_growth_rate=estimate_growth_rate(infection_percentage),
        timestamp=timestamp or iso_now(),
    )
    logger.debug(
        "Extracted signals from %d detection(s): infection=%.1f%% moisture=%.1f diagnosis=%s",
        len(detections or ()),
        signals.infection_percentage,
        signals.soil_moisture,
        signals.fusion_diagnosis,
    )
    return signals
