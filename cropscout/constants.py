"""
Application Constants
=====================

Centralized constants to replace magic numbers throughout the codebase.
Organized by domain for easy discovery and maintenance.

Usage:
    from cropscout.constants import EARTH_RADIUS_METERS
    from cropscout.constants import FieldDefaults, PathDefaults
"""

# =============================================================================
# Geodesy
# =============================================================================

EARTH_RADIUS_METERS = 6_371_000.0

# Decimal places kept on cell centre coordinates (~0.1 m)
COORDINATE_PRECISION = 6


# =============================================================================
# Field / Grid
# =============================================================================

class FieldDefaults:
    """Monitored field geometry (New Delhi demo plot, ~220 m x 220 m)."""
    CENTER_LAT = 28.6139
    CENTER_LNG = 77.2090
    LAT_DELTA = 0.002  # degrees north-south
    LNG_DELTA = 0.002  # degrees east-west
    GRID_ROWS = 10
    GRID_COLS = 10


# =============================================================================
# Spray path planning
# =============================================================================

class PathDefaults:
    """Drone mission timing."""
    DRONE_SPEED_MPS = 5.0  # metres per second
    SPRAY_SECONDS_PER_CELL = 3.0  # seconds hovering per waypoint


# =============================================================================
# Signals / Alerts
# =============================================================================

class SignalDefaults:
    """Values assumed when an input source is missing."""
    INFECTION_PERCENTAGE = 0.0
    ROI_RATIO = 0.0
    POTENTIAL_LOSS = 0.0
    SOIL_MOISTURE = 50.0  # %
    SOIL_TEMPERATURE = 25.0  # °C
    AIR_HUMIDITY = 60.0  # %
    FUSION_SEVERITY = "none"
    FUSION_DIAGNOSIS = "Unknown"
    FUSION_CONFIDENCE = 0.0


class GrowthHeuristic:
    """Infection growth estimate from the current infection level (%/hour)."""
    HIGH_THRESHOLD = 15.0
    HIGH_FACTOR = 0.15
    MODERATE_THRESHOLD = 5.0
    MODERATE_FACTOR = 0.10


ALERT_DEBOUNCE_SECONDS = 30.0
SENSOR_MAX_AGE_MINUTES = 5


# =============================================================================
# Economics (per-field defaults, INR)
# =============================================================================

class EconomicDefaults:
    """Crop, disease and intervention assumptions for ROI estimates."""
    TOTAL_AREA_HECTARES = 2.0
    CELL_AREA_HECTARES = 0.02
    CROP_TYPE = "Tomato"
    YIELD_PER_HECTARE = 50_000.0  # kg/ha
    PRICE_PER_KG = 25.0
    CURRENCY_SYMBOL = "₹"
    CURRENCY_CODE = "INR"
    LOSS_PERCENTAGE_UNTREATED = 40.0
    LOSS_PERCENTAGE_TREATED = 8.0
    SPREAD_RATE_PER_WEEK = 15.0
    COST_PER_HECTARE = 3000.0
    FIXED_COST_PER_MISSION = 500.0
    EFFICACY = 85.0
    APPLICATIONS_PER_SEASON = 3
    CHEMICAL_PER_HECTARE = 15.0  # litres
    ENVIRONMENTAL_COST_PER_LITER = 50.0
    IRRIGATION_COST_FACTOR = 0.3  # irrigation cost relative to spraying
