"""
Domain Layer
============
Value objects and pure grid operations for the field monitoring core.
"""

from cropscout.domain.alerts import Alert, AlertTemplate, Computed, Rule, Static, TemplateValue
from cropscout.domain.detections import Detection, DetectionRecord
from cropscout.domain.economics import EconomicConfig, EconomicImpact
from cropscout.domain.exceptions import (
    ConfigurationError,
    CropScoutError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from cropscout.domain.field_grid import (
    FieldGrid,
    FieldGridConfig,
    GridCell,
    GridStats,
    calculate_grid_stats,
    create_field_grid,
    find_cell_for_point,
    flatten_grid,
    get_infected_cells,
    is_point_in_cell,
)
from cropscout.domain.fusion import Diagnosis, FusionResult
from cropscout.domain.geo import CellBounds, GeoPoint, haversine_distance
from cropscout.domain.path import SprayPath, Waypoint
from cropscout.domain.sensors import SensorSnapshot
from cropscout.domain.signals import Signals
from cropscout.domain.zones import ZoneStatistics

__all__ = [
    "Alert",
    "AlertTemplate",
    "CellBounds",
    "Computed",
    "ConfigurationError",
    "CropScoutError",
    "Detection",
    "DetectionRecord",
    "Diagnosis",
    "EconomicConfig",
    "EconomicImpact",
    "FieldGrid",
    "FieldGridConfig",
    "FusionResult",
    "GeoPoint",
    "GridCell",
    "GridStats",
    "NotFoundError",
    "Rule",
    "SensorSnapshot",
    "ServiceError",
    "Signals",
    "SprayPath",
    "Static",
    "TemplateValue",
    "ValidationError",
    "Waypoint",
    "ZoneStatistics",
    "calculate_grid_stats",
    "create_field_grid",
    "find_cell_for_point",
    "flatten_grid",
    "get_infected_cells",
    "haversine_distance",
    "is_point_in_cell",
]
