"""
Sensor Data Simulator
=====================
Generates realistic agricultural sensor readings for demos and tests when no
physical sensor node is attached.

Typical ranges:
    soil moisture    10-95 %      (50-80 % base, +-10 % variation)
    soil temperature 15-45 °C     (diurnal sine around 25 °C)
    air humidity     25-95 %
    soil pH          5.5-8.0      (around 6.8)
    light intensity  lux, solar cycle peaking at midday
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable

import numpy as np

from cropscout.domain.sensors import SensorSnapshot
from cropscout.utils.time import utc_now

logger = logging.getLogger(__name__)

DEFAULT_SENSOR_ID = "FIELD_01_SENSOR_A"


class SensorSimulator:
    """
    Produces :class:`SensorSnapshot` readings.

    Args:
        rng: Random source; pass ``np.random.default_rng(seed)`` for reproducible output
        clock: Current time (drives the diurnal temperature and light cycles)
        sensor_id: Identifier stamped on every snapshot
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] = utc_now,
        sensor_id: str = DEFAULT_SENSOR_ID,
    ) -> None:
        self._rng = rng or np.random.default_rng()
        self._clock = clock
        self.sensor_id = sensor_id

    def _noise(self, spread: float) -> float:
        return float(self._rng.uniform(-spread / 2, spread / 2))

    def soil_moisture(self) -> float:
        base = self._rng.uniform(50, 80)
        return round(float(np.clip(base + self._noise(20), 10, 95)), 1)

    def soil_temperature(self, hour: int) -> float:
        daily_variation = math.sin((hour - 6) * math.pi / 12) * 8
        return round(float(np.clip(25 + daily_variation + self._noise(3), 15, 45)), 1)

    def air_humidity(self) -> float:
        base = self._rng.uniform(60, 80)
        return round(float(np.clip(base + self._noise(15), 25, 95)), 1)

    def soil_ph(self) -> float:
        return round(float(np.clip(6.8 + self._noise(0.8), 5.5, 8.0)), 1)

    def light_intensity(self, hour: int) -> float:
        if hour < 6 or hour > 19:
            return round(float(self._rng.uniform(0, 100)), 1)
        solar_angle = math.sin((hour - 6) * math.pi / 13)
        light = 75_000 * solar_angle + self._noise(10_000)
        return float(round(max(1000.0, light)))

    def snapshot(self) -> SensorSnapshot:
        now = self._clock()
        snapshot = SensorSnapshot(
            soil_moisture=self.soil_moisture(),
            soil_temperature=self.soil_temperature(now.hour),
            air_humidity=self.air_humidity(),
            soil_ph=self.soil_ph(),
            light_intensity=self.light_intensity(now.hour),
            timestamp=now.isoformat(),
            sensor_id=self.sensor_id,
            status="online",
        )
        logger.debug("Simulated sensor snapshot: %s", snapshot)
        return snapshot
