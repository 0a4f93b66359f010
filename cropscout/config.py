"""
Configuration for CropScout
===========================
Runtime settings for the field monitoring service, loaded from environment
variables. Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from cropscout.constants import ALERT_DEBOUNCE_SECONDS, SENSOR_MAX_AGE_MINUTES, FieldDefaults, PathDefaults
from cropscout.domain.field_grid import FieldGridConfig
from cropscout.domain.geo import GeoPoint
from cropscout.enums import PathStrategy


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("CROPSCOUT_ENV", "development"))
    DEBUG: bool = field(default_factory=lambda: _env_bool("CROPSCOUT_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("CROPSCOUT_LOG_LEVEL", "INFO"))
    # Empty disables the rotating file handler
    log_file: str = field(default_factory=lambda: os.getenv("CROPSCOUT_LOG_FILE", ""))
    host: str = field(default_factory=lambda: os.getenv("CROPSCOUT_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("CROPSCOUT_PORT", 5000))

    field_center_lat: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_FIELD_CENTER_LAT", FieldDefaults.CENTER_LAT)
    )
    field_center_lng: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_FIELD_CENTER_LNG", FieldDefaults.CENTER_LNG)
    )
    field_lat_delta: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_FIELD_LAT_DELTA", FieldDefaults.LAT_DELTA)
    )
    field_lng_delta: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_FIELD_LNG_DELTA", FieldDefaults.LNG_DELTA)
    )
    grid_rows: int = field(default_factory=lambda: _env_int("CROPSCOUT_GRID_ROWS", FieldDefaults.GRID_ROWS))
    grid_cols: int = field(default_factory=lambda: _env_int("CROPSCOUT_GRID_COLS", FieldDefaults.GRID_COLS))

    drone_speed_mps: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_DRONE_SPEED_MPS", PathDefaults.DRONE_SPEED_MPS)
    )
    spray_seconds_per_cell: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_SPRAY_SECONDS_PER_CELL", PathDefaults.SPRAY_SECONDS_PER_CELL)
    )
    path_strategy: str = field(
        default_factory=lambda: os.getenv("CROPSCOUT_PATH_STRATEGY", PathStrategy.NEAREST_NEIGHBOR.value)
    )

    alert_debounce_seconds: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_ALERT_DEBOUNCE_SECONDS", ALERT_DEBOUNCE_SECONDS)
    )
    sensor_max_age_minutes: float = field(
        default_factory=lambda: _env_float("CROPSCOUT_SENSOR_MAX_AGE_MINUTES", SENSOR_MAX_AGE_MINUTES)
    )

    def grid_config(self) -> FieldGridConfig:
        return FieldGridConfig(
            rows=self.grid_rows,
            cols=self.grid_cols,
            center=GeoPoint(self.field_center_lat, self.field_center_lng),
            lat_delta=self.field_lat_delta,
            lng_delta=self.field_lng_delta,
        )

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "DEBUG": self.DEBUG,
        }


# ==================== CONFIGURATION VALIDATION ====================


def validate_config(config: AppConfig) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Args:
        config: AppConfig instance

    Returns:
        List of warning messages (empty if all valid)
    """
    warnings = []

    if config.grid_rows * config.grid_cols > 2500:
        warnings.append(
            f"Grid {config.grid_rows}x{config.grid_cols} is very fine. "
            "Nearest-neighbour planning is quadratic in infected cells. Recommended: <= 50x50"
        )

    if config.alert_debounce_seconds < 5:
        warnings.append(
            f"Alert debounce window ({config.alert_debounce_seconds}s) is very short. "
            "Operators may see repeated alerts. Recommended: 30s"
        )

    if config.drone_speed_mps > 20:
        warnings.append(f"Drone speed ({config.drone_speed_mps} m/s) is unusually high for spraying")

    if config.path_strategy.lower() not in {s.value for s in PathStrategy}:
        warnings.append(f"Unknown path strategy '{config.path_strategy}'")

    if not -90 <= config.field_center_lat <= 90 or not -180 <= config.field_center_lng <= 180:
        warnings.append("Field centre is not a valid latitude/longitude")

    return warnings


def setup_logging(debug: bool = False, log_file: str | None = None, level: str | None = None) -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or "INFO").upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid adding duplicate handlers when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "cropscout_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "cropscout_file" for h in root.handlers)
    added_handler = False

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "cropscout_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if log_file and not has_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "cropscout_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"cropscout_console", "cropscout_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(log_level)}")

    if _env_bool("CROPSCOUT_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    import logging

    config = AppConfig()
    logger = logging.getLogger("config_loader")
    for warning in validate_config(config):
        logger.warning(warning)
    return config
