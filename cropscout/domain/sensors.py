"""
Sensor Domain Objects
=====================
Environmental sensor snapshots plus the categorisation, validation and
freshness checks the fusion engine relies on.

Categories
----------
Soil moisture (%):  <30 dry, <50 moderate, <75 optimal, else wet
Soil temp (°C):     <18 cold, <28 optimal, <38 warm, else hot
Air humidity (%):   <40 dry, <70 moderate, <85 humid, else very_humid
Soil pH:            <6.0 acidic, <7.0 slightly_acidic, <7.5 neutral, else alkaline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cropscout.constants import SENSOR_MAX_AGE_MINUTES, SignalDefaults
from cropscout.enums import ReadingStatus
from cropscout.utils.time import coerce_datetime, utc_now

_DEFAULT_PH = 6.8


@dataclass(frozen=True)
class SensorSnapshot:
    """One reading from the field sensor node; any value may be missing."""

    soil_moisture: float | None = None
    soil_temperature: float | None = None
    air_humidity: float | None = None
    soil_ph: float | None = None
    light_intensity: float | None = None
    timestamp: str | None = None
    sensor_id: str | None = None
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "soil_moisture": self.soil_moisture,
            "soil_temperature": self.soil_temperature,
            "air_humidity": self.air_humidity,
            "soil_ph": self.soil_ph,
            "light_intensity": self.light_intensity,
            "timestamp": self.timestamp,
            "sensor_id": self.sensor_id,
            "status": self.status,
        }


@dataclass(frozen=True)
class ReadingCategory:
    value: float
    category: str
    status: ReadingStatus

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "category": self.category, "status": self.status.value}


@dataclass(frozen=True)
class SensorCategories:
    moisture: ReadingCategory
    temperature: ReadingCategory
    humidity: ReadingCategory
    ph: ReadingCategory

    def get(self, name: str) -> ReadingCategory:
        return getattr(self, name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "moisture": self.moisture.to_dict(),
            "temperature": self.temperature.to_dict(),
            "humidity": self.humidity.to_dict(),
            "ph": self.ph.to_dict(),
        }


@dataclass(frozen=True)
class SensorValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    status: ReadingStatus = ReadingStatus.NORMAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SensorFreshness:
    fresh: bool
    age_minutes: int = 0
    warning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"fresh": self.fresh, "age_minutes": self.age_minutes, "warning": self.warning}


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


def categorize_sensor_data(sensor: SensorSnapshot) -> SensorCategories:
    """Bucket each reading into the categories the fusion rules match on."""
    moisture = _or_default(sensor.soil_moisture, SignalDefaults.SOIL_MOISTURE)
    temperature = _or_default(sensor.soil_temperature, SignalDefaults.SOIL_TEMPERATURE)
    humidity = _or_default(sensor.air_humidity, SignalDefaults.AIR_HUMIDITY)
    ph = _or_default(sensor.soil_ph, _DEFAULT_PH)

    if moisture < 30:
        moisture_category = "dry"
    elif moisture < 50:
        moisture_category = "moderate"
    elif moisture < 75:
        moisture_category = "optimal"
    else:
        moisture_category = "wet"
    moisture_status = ReadingStatus.WARNING if moisture < 30 or moisture > 80 else ReadingStatus.NORMAL

    if temperature < 18:
        temperature_category = "cold"
    elif temperature < 28:
        temperature_category = "optimal"
    elif temperature < 38:
        temperature_category = "warm"
    else:
        temperature_category = "hot"
    if temperature < 18:
        temperature_status = ReadingStatus.CAUTION
    elif temperature > 35:
        temperature_status = ReadingStatus.WARNING
    else:
        temperature_status = ReadingStatus.NORMAL

    if humidity < 40:
        humidity_category = "dry"
    elif humidity < 70:
        humidity_category = "moderate"
    elif humidity < 85:
        humidity_category = "humid"
    else:
        humidity_category = "very_humid"
    if humidity > 80:
        humidity_status = ReadingStatus.WARNING
    elif humidity < 35:
        humidity_status = ReadingStatus.CAUTION
    else:
        humidity_status = ReadingStatus.NORMAL

    if ph < 6.0:
        ph_category = "acidic"
    elif ph < 7.0:
        ph_category = "slightly_acidic"
    elif ph < 7.5:
        ph_category = "neutral"
    else:
        ph_category = "alkaline"
    ph_status = ReadingStatus.CAUTION if ph < 5.8 or ph > 7.8 else ReadingStatus.NORMAL

    return SensorCategories(
        moisture=ReadingCategory(moisture, moisture_category, moisture_status),
        temperature=ReadingCategory(temperature, temperature_category, temperature_status),
        humidity=ReadingCategory(humidity, humidity_category, humidity_status),
        ph=ReadingCategory(ph, ph_category, ph_status),
    )


def validate_sensor_data(sensor: SensorSnapshot | None) -> SensorValidation:
    """
    Reject physically impossible readings and flag extreme ones.

    Missing individual values are not errors; a missing snapshot is.
    """
    if sensor is None:
        return SensorValidation(valid=False, errors=["No sensor data provided"], status=ReadingStatus.ERROR)

    errors: list[str] = []
    warnings: list[str] = []
    moisture, temperature, humidity = sensor.soil_moisture, sensor.soil_temperature, sensor.air_humidity

    if moisture is not None and not 0 <= moisture <= 100:
        errors.append("Invalid soil moisture reading")
    if temperature is not None and not -10 <= temperature <= 60:
        errors.append("Soil temperature out of realistic range")
    if humidity is not None and not 0 <= humidity <= 100:
        errors.append("Invalid humidity reading")

    if moisture is not None and moisture < 10:
        warnings.append("Critically low soil moisture - immediate irrigation needed")
    if temperature is not None and temperature > 45:
        warnings.append("Extreme heat detected - crop damage risk")
    if humidity is not None and humidity > 90:
        warnings.append("Very high humidity - disease outbreak risk")

    if errors:
        status = ReadingStatus.ERROR
    elif warnings:
        status = ReadingStatus.WARNING
    else:
        status = ReadingStatus.NORMAL
    return SensorValidation(valid=not errors, errors=errors, warnings=warnings, status=status)


def check_sensor_freshness(
    sensor: SensorSnapshot | None,
    max_age_minutes: float = SENSOR_MAX_AGE_MINUTES,
    *,
    now: datetime | None = None,
) -> SensorFreshness:
    """Flag snapshots older than ``max_age_minutes`` (or without a usable timestamp)."""
    taken_at = coerce_datetime(sensor.timestamp) if sensor else None
    if taken_at is None:
        return SensorFreshness(fresh=False, age_minutes=0, warning="Sensor timestamp unavailable")

    now = now or utc_now()
    age_minutes = (now - taken_at).total_seconds() / 60
    if age_minutes > max_age_minutes:
        rounded = round(age_minutes)
        return SensorFreshness(
            fresh=False,
            age_minutes=rounded,
            warning=f"Sensor data is {rounded} minutes old. Readings may be stale.",
        )
    return SensorFreshness(fresh=True, age_minutes=max(0, round(age_minutes)))
