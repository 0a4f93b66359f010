"""
Shared test fixtures for the CropScout test suite.

Provides:
- A controllable clock for the debouncer and the alert pipeline
- Detection record factories placed on real grid cells
- A Flask app / test client wired through ``create_app``

Usage:
    def test_example(make_record, cell_center):
        record = make_record("d1", cell_center(0, 0))
        assert record.gps is not None
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure repository root is on sys.path so tests can import application modules
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cropscout import create_app  # noqa: E402
from cropscout.domain.detections import Detection, DetectionRecord  # noqa: E402
from cropscout.domain.field_grid import FieldGridConfig, create_field_grid  # noqa: E402
from cropscout.domain.geo import GeoPoint  # noqa: E402

# ---------------------------------------------------------------------------
# Logging, keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("cropscout").setLevel(logging.WARNING)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def fake_clock():
    return FakeClock()


# ========================== Field Fixtures =================================


@pytest.fixture()
def grid_config():
    """Default 10x10 demo field."""
    return FieldGridConfig()


@pytest.fixture()
def cell_center(grid_config):
    """Return the centre point of cell (row, col) of the default grid."""
    grid = create_field_grid(grid_config)

    def _center(row: int, col: int) -> GeoPoint:
        return grid.cell(row, col).center

    return _center


@pytest.fixture()
def make_record():
    """Factory for detection records with a single classified object."""

    def _make(
        record_id: str,
        gps: GeoPoint | None,
        class_name: str = "Leaf Blight",
        confidence: float = 0.9,
        timestamp: str | None = None,
    ) -> DetectionRecord:
        detections = (Detection(class_name=class_name, confidence=confidence),)
        return DetectionRecord(
            id=record_id,
            gps=gps,
            timestamp=timestamp,
            detections=detections,
            detection_count=len(detections),
        )

    return _make


@pytest.fixture()
def corner_records(make_record, cell_center):
    """25 detections covering the 5x5 north-west corner of the default grid."""
    return [
        make_record(f"det_{row}_{col}", cell_center(row, col))
        for row in range(5)
        for col in range(5)
    ]


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app():
    app = create_app({"alert_debounce_seconds": 30.0, "log_file": ""})
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
