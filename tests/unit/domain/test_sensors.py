from datetime import datetime, timedelta, timezone

from cropscout.domain.sensors import (
    SensorSnapshot,
    categorize_sensor_data,
    check_sensor_freshness,
    validate_sensor_data,
)
from cropscout.enums import ReadingStatus


def test_categorize_dry_hot_field():
    categories = categorize_sensor_data(SensorSnapshot(soil_moisture=20, soil_temperature=40, air_humidity=30))
    assert categories.moisture.category == "dry"
    assert categories.moisture.status == ReadingStatus.WARNING
    assert categories.temperature.category == "hot"
    assert categories.temperature.status == ReadingStatus.WARNING
    assert categories.humidity.category == "dry"
    assert categories.humidity.status == ReadingStatus.CAUTION


def test_categorize_uses_defaults_for_missing_values():
    categories = categorize_sensor_data(SensorSnapshot())
    assert categories.moisture.category == "optimal"
    assert categories.temperature.category == "optimal"
    assert categories.humidity.category == "moderate"
    assert categories.ph.category == "slightly_acidic"


def test_zero_reading_is_not_replaced_by_default():
    categories = categorize_sensor_data(SensorSnapshot(soil_moisture=0))
    assert categories.moisture.value == 0
    assert categories.moisture.category == "dry"


def test_validate_rejects_impossible_readings():
    result = validate_sensor_data(SensorSnapshot(soil_moisture=120, soil_temperature=80))
    assert not result.valid
    assert result.status == ReadingStatus.ERROR
    assert "Invalid soil moisture reading" in result.errors
    assert "Soil temperature out of realistic range" in result.errors


def test_validate_warns_on_extremes():
    result = validate_sensor_data(SensorSnapshot(soil_moisture=5, air_humidity=95))
    assert result.valid
    assert result.status == ReadingStatus.WARNING
    assert len(result.warnings) == 2


def test_validate_missing_snapshot():
    result = validate_sensor_data(None)
    assert not result.valid
    assert result.errors == ["No sensor data provided"]


def test_freshness():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    fresh = SensorSnapshot(timestamp=(now - timedelta(minutes=2)).isoformat())
    stale = SensorSnapshot(timestamp=(now - timedelta(minutes=12)).isoformat())

    assert check_sensor_freshness(fresh, now=now).fresh
    result = check_sensor_freshness(stale, now=now)
    assert not result.fresh
    assert result.age_minutes == 12
    assert "12 minutes old" in result.warning


def test_freshness_without_timestamp():
    result = check_sensor_freshness(SensorSnapshot(soil_moisture=50))
    assert not result.fresh
    assert result.warning == "Sensor timestamp unavailable"
