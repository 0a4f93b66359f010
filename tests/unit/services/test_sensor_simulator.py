from datetime import datetime, timezone

import numpy as np

from cropscout.domain.sensors import validate_sensor_data
from cropscout.services.sensor_simulator import DEFAULT_SENSOR_ID, SensorSimulator


def _simulator(seed=1, hour=12):
    clock = lambda: datetime(2026, 6, 1, hour, 0, tzinfo=timezone.utc)  # noqa: E731
    return SensorSimulator(rng=np.random.default_rng(seed), clock=clock)


def test_readings_stay_in_range():
    sim = _simulator()
    for hour in range(24):
        assert 10 <= sim.soil_moisture() <= 95
        assert 15 <= sim.soil_temperature(hour) <= 45
        assert 25 <= sim.air_humidity() <= 95
        assert 5.5 <= sim.soil_ph() <= 8.0


def test_light_follows_the_sun():
    sim = _simulator()
    assert sim.light_intensity(2) < 100
    assert sim.light_intensity(23) < 100
    assert sim.light_intensity(12) >= 1000


def test_snapshot_is_reproducible_and_valid():
    first = _simulator(seed=42).snapshot()
    second = _simulator(seed=42).snapshot()

    assert first == second
    assert first.sensor_id == DEFAULT_SENSOR_ID
    assert first.status == "online"
    assert first.timestamp == "2026-06-01T12:00:00+00:00"
    assert validate_sensor_data(first).valid
