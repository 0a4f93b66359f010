"""
Decision Rules
==============
Static, priority-ordered condition -> alert table evaluated by the rule
engine. Read-only at runtime.

Priority 1 rules are CRITICAL, 2 are WARNING, 4-5 are INFO.
"""

from __future__ import annotations

from cropscout.domain.alerts import AlertTemplate, Computed, Rule, Static
from cropscout.domain.exceptions import NotFoundError
from cropscout.domain.signals import Signals
from cropscout.enums import AlertType

# === CRITICAL RULES (Priority 1) ===


def _critical_infection(s: Signals) -> bool:
    return s.infection_percentage > 25 and s.fusion_severity in ("high", "medium")


def _critical_drought(s: Signals) -> bool:
    return s.soil_moisture < 20 or s.diagnosis_mentions("drought")


def _high_economic_risk(s: Signals) -> bool:
    return s.potential_loss > 100_000 and s.infection_percentage > 15


def _rapid_growth(s: Signals) -> bool:
    return s.infection_growth_rate > 2.0


# === WARNING RULES (Priority 2) ===


def _moderate_infection(s: Signals) -> bool:
    return 10 <= s.infection_percentage <= 25 and s.fusion_severity != "none"


def _heat_stress(s: Signals) -> bool:
    return s.soil_temperature > 35 or s.diagnosis_mentions("heat")


def _fungal_risk(s: Signals) -> bool:
    return (s.air_humidity > 85 and s.soil_moisture > 70) or s.diagnosis_mentions("fungal")


def _low_roi(s: Signals) -> bool:
    return 0 < s.roi_ratio < 2 and s.infection_percentage < 15


# === INFO RULES (Priority 4-5) ===


def _early_detection(s: Signals) -> bool:
    return 3 <= s.infection_percentage < 10 and s.fusion_confidence > 0.7


def _system_healthy(s: Signals) -> bool:
    return (
        s.infection_percentage < 5
        and 40 <= s.soil_moisture <= 70
        and 20 <= s.soil_temperature <= 32
        and s.diagnosis_mentions("healthy")
    )


DECISION_RULES: tuple[Rule, ...] = (
    Rule(
        id="RULE_001",
        name="Critical Infection Outbreak",
        priority=1,
        condition=_critical_infection,
        alert=AlertTemplate(
            type=AlertType.CRITICAL,
            title="Disease Outbreak Detected",
            message=Computed(
                lambda s: f"{s.infection_percentage:.1f}% of field infected. Disease spreading rapidly."
            ),
            action="Apply appropriate fungicide/pesticide within 24 hours. Target infected zones first.",
            timeline="0-24 hours",
            icon="🚨",
            estimated_loss=Computed(lambda s: s.potential_loss),
        ),
    ),
    Rule(
        id="RULE_003",
        name="Critical Drought Stress",
        priority=1,
        condition=_critical_drought,
        alert=AlertTemplate(
            type=AlertType.CRITICAL,
            title="Severe Drought Detected",
            message=Computed(
                lambda s: f"Soil moisture critically low ({s.soil_moisture:.1f}%). Plants under severe stress."
            ),
            action="Irrigate immediately. Do NOT apply chemicals until soil moisture restored to 40%+.",
            timeline="0-12 hours",
            icon="💧",
            prevent_mistake=Static("Prevents misdiagnosis as disease - saves unnecessary chemical costs"),
        ),
    ),
    Rule(
        id="RULE_007",
        name="High Economic Risk",
        priority=1,
        condition=_high_economic_risk,
        alert=AlertTemplate(
            type=AlertType.CRITICAL,
            title="High Economic Risk",
            message=Computed(lambda s: f"Potential loss: ₹{s.potential_loss / 1000:.0f}k if untreated."),
            action="Immediate intervention economically justified. Apply treatment within 24 hours.",
            timeline="0-24 hours",
            icon="💸",
        ),
    ),
    Rule(
        id="RULE_008",
        name="Rapid Infection Growth",
        priority=1,
        condition=_rapid_growth,
        alert=AlertTemplate(
            type=AlertType.CRITICAL,
            title="Rapid Disease Spread",
            message=Computed(lambda s: f"Infection spreading at {s.infection_growth_rate:.1f}% per hour."),
            action="Immediate containment required. Apply treatment to infected zones. Consider quarantine.",
            timeline="0-12 hours",
            icon="📈",
        ),
    ),
    Rule(
        id="RULE_002",
        name="Moderate Infection Warning",
        priority=2,
        condition=_moderate_infection,
        alert=AlertTemplate(
            type=AlertType.WARNING,
            title="Infection Spreading",
            message=Computed(lambda s: f"{s.infection_percentage:.1f}% of field affected. Monitor closely."),
            action="Prepare treatment equipment. Verify diagnosis. Schedule spray within 48 hours.",
            timeline="24-48 hours",
            icon="⚠️",
        ),
    ),
    Rule(
        id="RULE_004",
        name="Heat Stress Alert",
        priority=2,
        condition=_heat_stress,
        alert=AlertTemplate(
            type=AlertType.WARNING,
            title="Heat Stress Risk",
            message=Computed(
                lambda s: f"Soil temperature {s.soil_temperature:.1f}°C exceeds safe threshold (35°C)."
            ),
            action="Increase irrigation frequency. Monitor for wilting. Avoid spraying in peak heat.",
            timeline="12-24 hours",
            icon="🌡️",
        ),
    ),
    Rule(
        id="RULE_005",
        name="Fungal Outbreak Risk",
        priority=2,
        condition=_fungal_risk,
        alert=AlertTemplate(
            type=AlertType.WARNING,
            title="High Fungal Risk",
            message=Computed(
                lambda s: (
                    f"Humidity {s.air_humidity:.0f}% + soil moisture {s.soil_moisture:.0f}% "
                    "creates ideal fungal conditions."
                )
            ),
            action="Apply preventive fungicide. Reduce irrigation frequency. Improve field drainage.",
            timeline="24-48 hours",
            icon="💨",
        ),
    ),
    Rule(
        id="RULE_006",
        name="Low ROI Warning",
        priority=2,
        condition=_low_roi,
        alert=AlertTemplate(
            type=AlertType.WARNING,
            title="Low ROI - Verify Before Action",
            message=Computed(lambda s: f"ROI only {s.roi_ratio:.1f}×. Treatment cost may exceed benefit."),
            action="DO NOT spray yet. Monitor for 24 hours. Consider spot treatment in worst zones only.",
            timeline="Monitor 24-48h",
            icon="💰",
            savings_potential=Static("Prevents unnecessary spending on marginal cases"),
        ),
    ),
    Rule(
        id="RULE_010",
        name="Early Detection Preventive",
        priority=4,
        condition=_early_detection,
        alert=AlertTemplate(
            type=AlertType.INFO,
            title="Early Detection - Preventive Opportunity",
            message=Computed(
                lambda s: (
                    f"{s.infection_percentage:.1f}% infection detected early. "
                    "Ideal time for low-cost prevention."
                )
            ),
            action="Consider spot treatment in affected zones only. Continue monitoring unaffected areas.",
            timeline="48-72 hours",
            icon="🛡️",
            benefit=Static("Early intervention prevents escalation and reduces treatment costs by 60%"),
        ),
    ),
    Rule(
        id="RULE_009",
        name="System Healthy",
        priority=5,
        condition=_system_healthy,
        alert=AlertTemplate(
            type=AlertType.INFO,
            title="Field Health Excellent",
            message=Static("All environmental and disease metrics within optimal range."),
            action="Continue current care regimen. Routine monitoring sufficient.",
            timeline="N/A",
            icon="✅",
        ),
    ),
)


def get_rule(rule_id: str) -> Rule:
    for rule in DECISION_RULES:
        if rule.id == rule_id:
            return rule
    raise NotFoundError(f"Unknown rule '{rule_id}'", detail={"rule_id": rule_id})
