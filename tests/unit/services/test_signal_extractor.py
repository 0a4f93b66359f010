import pytest

from cropscout.domain.economics import EconomicImpact
from cropscout.domain.field_grid import GridStats
from cropscout.domain.fusion import Diagnosis, FusionResult
from cropscout.domain.sensors import SensorSnapshot
from cropscout.enums import FusionStatus
from cropscout.services.signal_extractor import estimate_growth_rate, extract_signals


def _stats(infected: int, total: int = 100) -> GridStats:
    pct = round(infected / total * 100, 1)
    return GridStats(
        total_cells=total,
        infected_count=infected,
        healthy_count=total - infected,
        infected_percentage=pct,
        healthy_percentage=round(100 - pct, 1),
        chemical_savings=round(100 - pct, 1),
    )


def _fusion(diagnosis: str, severity: str, confidence: float) -> FusionResult:
    return FusionResult(
        status=FusionStatus.FUSION_SUCCESS,
        message="ok",
        diagnosis=Diagnosis(refined_diagnosis=diagnosis, severity=severity, confidence=confidence),
    )


def test_all_sources_missing_gives_defaults():
    signals = extract_signals()
    assert signals.infection_percentage == 0.0
    assert signals.roi_ratio == 0.0
    assert signals.potential_loss == 0.0
    assert signals.soil_moisture == 50.0
    assert signals.soil_temperature == 25.0
    assert signals.air_humidity == 60.0
    assert signals.fusion_severity == "none"
    assert signals.fusion_diagnosis == "Unknown"
    assert signals.fusion_confidence == 0.0
    assert signals.infection_growth_rate == 0.0


@pytest.mark.parametrize(
    "pct, expected",
    [(0, 0.0), (5, 0.0), (5.1, 0.51), (15, 1.5), (20, 3.0), (25, 3.75)],
)
def test_growth_rate_heuristic(pct, expected):
    assert estimate_growth_rate(pct) == pytest.approx(expected)


def test_grid_stats_feed_infection_level():
    signals = extract_signals(grid_stats=_stats(20))
    assert signals.infection_percentage == 20.0
    assert signals.infected_count == 20
    assert signals.total_cells == 100
    assert signals.infection_growth_rate == pytest.approx(3.0)


def test_only_latest_fusion_result_counts():
    results = [_fusion("Drought Stress", "high", 0.95), _fusion("Healthy (Confirmed)", "none", 0.98)]
    signals = extract_signals(fusion_results=results)
    assert signals.fusion_diagnosis == "Healthy (Confirmed)"
    assert signals.fusion_severity == "none"
    assert signals.fusion_confidence == 0.98


def test_fusion_result_without_diagnosis_keeps_defaults():
    results = [FusionResult(status=FusionStatus.NO_VISION_DATA, message="none")]
    signals = extract_signals(fusion_results=results)
    assert signals.fusion_diagnosis == "Unknown"


def test_sensor_values_override_defaults_but_zero_is_kept():
    signals = extract_signals(sensor_data=SensorSnapshot(soil_moisture=0.0, soil_temperature=38.5))
    assert signals.soil_moisture == 0.0
    assert signals.soil_temperature == 38.5
    assert signals.air_humidity == 60.0


def test_economic_impact_feeds_roi_and_loss():
    impact = EconomicImpact(
        has_infection=True,
        message="",
        potential_loss=125_000.0,
        roi={"per_application": {"roi_ratio": 4.2}},
    )
    signals = extract_signals(economic_impact=impact)
    assert signals.roi_ratio == 4.2
    assert signals.potential_loss == 125_000.0


def test_healthy_economic_impact_keeps_defaults():
    impact = EconomicImpact(has_infection=False, message="No disease detected - field is healthy!")
    signals = extract_signals(economic_impact=impact)
    assert signals.roi_ratio == 0.0
    assert signals.potential_loss == 0.0


def test_timestamp_passthrough():
    signals = extract_signals(timestamp="2026-01-01T00:00:00+00:00")
    assert signals.timestamp == "2026-01-01T00:00:00+00:00"
    assert signals.to_dict()["timestamp"] == "2026-01-01T00:00:00+00:00"
