"""
Common Enumerations
====================

Application-wide enums for alerting, fusion and spray planning.
"""

from enum import Enum


class AlertType(str, Enum):
    """
    Alert urgency tiers emitted by the rule engine.
    Used by: decision_rules, rule_engine, debouncer
    """
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value


class AlertCategory(str, Enum):
    """
    Mutually exclusive buckets used when collapsing conflicting alerts.
    Declaration order is the order survivors are emitted in.
    """
    DISEASE = "disease"
    ENVIRONMENTAL = "environmental"
    ECONOMIC = "economic"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


class FusionStatus(str, Enum):
    """
    Outcome of a single vision + sensor fusion.
    Used by: fusion_engine, field_monitor
    """
    FUSION_SUCCESS = "fusion_success"
    UNCERTAIN = "uncertain"
    NO_VISION_DATA = "no_vision_data"
    NO_SENSOR_DATA = "no_sensor_data"
    SENSOR_UNAVAILABLE = "sensor_unavailable"
    SENSOR_ERROR = "sensor_error"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class SprayAction(str, Enum):
    """
    Per-cell treatment decided by the fusion-aware planner.
    """
    CHEMICAL_SPRAY = "chemical_spray"
    IRRIGATION = "irrigation"
    MONITOR = "monitor"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class PathStrategy(str, Enum):
    """
    Available spray path planners.
    """
    NEAREST_NEIGHBOR = "nearest_neighbor"
    SWEEP = "sweep"

    def __str__(self) -> str:
        return self.value


class ReadingStatus(str, Enum):
    """
    Per-reading status from sensor categorisation and validation.
    """
    NORMAL = "normal"
    CAUTION = "caution"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value
