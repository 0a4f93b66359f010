"""
Services Layer
==============
Field monitoring services: grid mapping, spray planning, fusion, economics
and the alert pipeline.
"""

from cropscout.services.alert_pipeline import AlertPipeline, AlertPipelineResult
from cropscout.services.debouncer import AlertDebouncer
from cropscout.services.economic_calculator import EconomicCalculator, calculate_economic_impact
from cropscout.services.field_monitor import FieldMonitorService, FieldSnapshot
from cropscout.services.fusion_engine import FusionEngine, perform_batch_fusion, perform_fusion
from cropscout.services.path_planner import NearestNeighborPlanner, SweepPlanner, get_planner
from cropscout.services.rule_engine import evaluate_alerts
from cropscout.services.sensor_simulator import SensorSimulator
from cropscout.services.signal_extractor import extract_signals

__all__ = [
    "AlertDebouncer",
    "AlertPipeline",
    "AlertPipelineResult",
    "EconomicCalculator",
    "FieldMonitorService",
    "FieldSnapshot",
    "FusionEngine",
    "NearestNeighborPlanner",
    "SensorSimulator",
    "SweepPlanner",
    "calculate_economic_impact",
    "evaluate_alerts",
    "extract_signals",
    "get_planner",
    "perform_batch_fusion",
    "perform_fusion",
]
