from datetime import datetime, timezone

import pytest

from cropscout.domain.alerts import Alert
from cropscout.domain.signals import Signals
from cropscout.enums import AlertCategory, AlertType
from cropscout.services.conflict_resolver import classify_alert, resolve_conflicts
from cropscout.services.rule_engine import evaluate_alerts


def _alert(title: str, priority: int = 1, rule_id: str = "RULE_T") -> Alert:
    return Alert(
        id=f"{rule_id}_0",
        rule_id=rule_id,
        rule_name=title,
        priority=priority,
        type=AlertType.WARNING,
        title=title,
        message="",
        action="",
        timeline="",
        icon="",
        timestamp="2026-01-01T00:00:00+00:00",
    )


@pytest.mark.parametrize(
    "title, category",
    [
        ("Disease Outbreak Detected", AlertCategory.DISEASE),
        ("Infection Spreading", AlertCategory.DISEASE),
        ("Severe Drought Detected", AlertCategory.ENVIRONMENTAL),
        ("Heat Stress Risk", AlertCategory.ENVIRONMENTAL),
        ("Humidity Warning", AlertCategory.ENVIRONMENTAL),
        ("High Economic Risk", AlertCategory.ECONOMIC),
        ("Low ROI - Verify Before Action", AlertCategory.ECONOMIC),
        ("High Fungal Risk", AlertCategory.SYSTEM),
        ("Field Health Excellent", AlertCategory.SYSTEM),
    ],
)
def test_classify_by_title(title, category):
    assert classify_alert(_alert(title)) == category


def test_classification_is_case_sensitive():
    assert classify_alert(_alert("disease in lowercase")) == AlertCategory.SYSTEM


def test_disease_keyword_wins_over_environmental():
    assert classify_alert(_alert("Disease after Drought")) == AlertCategory.DISEASE


def test_keeps_first_alert_per_category():
    alerts = [
        _alert("Disease Outbreak Detected", 1, "RULE_001"),
        _alert("Severe Drought Detected", 1, "RULE_003"),
        _alert("Infection Spreading", 2, "RULE_002"),
        _alert("Heat Stress Risk", 2, "RULE_004"),
        _alert("Low ROI - Verify Before Action", 2, "RULE_006"),
        _alert("High Fungal Risk", 2, "RULE_005"),
        _alert("Field Health Excellent", 5, "RULE_009"),
    ]
    resolved = resolve_conflicts(alerts)
    assert [a.rule_id for a in resolved] == ["RULE_001", "RULE_003", "RULE_006", "RULE_005"]


def test_survivor_is_most_urgent_in_category():
    signals = Signals(
        infection_percentage=30,
        fusion_severity="high",
        infection_growth_rate=4.5,
        soil_moisture=10,
        soil_temperature=40,
        potential_loss=200_000,
    )
    candidates = evaluate_alerts(signals, now=datetime(2026, 1, 1, tzinfo=timezone.utc))
    resolved = resolve_conflicts(candidates)

    categories = [classify_alert(a) for a in resolved]
    assert len(categories) == len(set(categories))
    assert len(resolved) <= 4
    for survivor in resolved:
        same_category = [a for a in candidates if classify_alert(a) == classify_alert(survivor)]
        assert survivor.priority == min(a.priority for a in same_category)


def test_single_or_empty_input_passes_through():
    assert resolve_conflicts([]) == []
    only = _alert("Field Health Excellent", 5)
    assert resolve_conflicts([only]) == [only]
