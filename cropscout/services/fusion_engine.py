"""
Multimodal Fusion Engine
========================
Combines a vision detection with the sensor snapshot to produce a refined,
context-aware diagnosis (e.g. yellow leaves + dry soil is drought stress,
not a fungal infection).

Initially rule-based: each fusion rule lists the vision patterns it applies
to and the sensor categories it requires; the matching rule with the highest
confidence wins.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from cropscout.domain.detections import Detection, DetectionRecord
from cropscout.domain.fusion import Diagnosis, FusionResult
from cropscout.domain.sensors import (
    SensorCategories,
    SensorSnapshot,
    categorize_sensor_data,
    check_sensor_freshness,
    validate_sensor_data,
)
from cropscout.enums import FusionStatus, ReadingStatus
from cropscout.utils.time import iso_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FusionRule:
    """
    Vision pattern + sensor condition -> diagnosis.

    ``sensor_conditions`` maps a category group (moisture, temperature,
    humidity, ph) to the accepted categories; groups not listed always match.
    """

    id: str
    vision_pattern: tuple[str, ...]
    sensor_conditions: dict[str, tuple[str, ...]]
    refined_diagnosis: str
    confidence: float
    severity: str
    action: str
    false_positive_prevention: str
    icon: str
    color: str = field(default="")


FUSION_RULES: tuple[FusionRule, ...] = (
    FusionRule(
        id="drought_stress",
        vision_pattern=("yellow_leaves", "wilting", "leaf_curl"),
        sensor_conditions={"moisture": ("dry",), "temperature": ("optimal", "warm", "hot")},
        refined_diagnosis="Drought Stress",
        confidence=0.95,
        severity="high",
        action="Immediate irrigation needed. Not a disease.",
        false_positive_prevention="Prevents misdiagnosis as fungal infection",
        icon="💧",
        color="#f59e0b",
    ),
    FusionRule(
        id="fungal_infection_wet",
        vision_pattern=("yellow_leaves", "spots", "blight"),
        sensor_conditions={"moisture": ("optimal", "wet"), "humidity": ("humid", "very_humid")},
        refined_diagnosis="Fungal Infection (High Humidity)",
        confidence=0.90,
        severity="high",
        action="Apply fungicide immediately. Reduce irrigation.",
        false_positive_prevention="Confirms disease with environmental evidence",
        icon="🦠",
        color="#ef4444",
    ),
    FusionRule(
        id="nutrient_deficiency",
        vision_pattern=("yellow_leaves", "discoloration"),
        sensor_conditions={"moisture": ("moderate", "optimal"), "ph": ("acidic", "alkaline")},
        refined_diagnosis="Nutrient Deficiency (pH imbalance)",
        confidence=0.85,
        severity="medium",
        action="Test soil nutrients. Adjust pH. Apply appropriate fertilizer.",
        false_positive_prevention="Distinguishes from disease based on pH",
        icon="🧪",
        color="#8b5cf6",
    ),
    FusionRule(
        id="heat_stress",
        vision_pattern=("wilting", "leaf_curl", "browning"),
        sensor_conditions={"temperature": ("hot",), "moisture": ("dry", "moderate")},
        refined_diagnosis="Heat Stress",
        confidence=0.92,
        severity="high",
        action="Increase irrigation. Provide shade if possible. Monitor closely.",
        false_positive_prevention="Prevents misdiagnosis as disease",
        icon="🌡️",
        color="#f97316",
    ),
    FusionRule(
        id="preventive_risk_high_humidity",
        vision_pattern=("healthy",),
        sensor_conditions={"humidity": ("very_humid",), "moisture": ("wet",)},
        refined_diagnosis="High Disease Risk (Preventive Alert)",
        confidence=0.75,
        severity="low",
        action="Monitor closely. Reduce irrigation. Improve ventilation. Consider preventive spray.",
        false_positive_prevention="Early warning based on conditions",
        icon="⚠️",
        color="#f59e0b",
    ),
    FusionRule(
        id="confirmed_healthy",
        vision_pattern=("healthy",),
        sensor_conditions={
            "moisture": ("moderate", "optimal"),
            "temperature": ("optimal",),
            "humidity": ("moderate", "humid"),
        },
        refined_diagnosis="Healthy (Confirmed)",
        confidence=0.98,
        severity="none",
        action="Continue current care regimen. No intervention needed.",
        false_positive_prevention="Multi-modal confirmation",
        icon="✅",
        color="#10b981",
    ),
    FusionRule(
        id="overwatering",
        vision_pattern=("yellow_leaves", "wilting", "root_issues"),
        sensor_conditions={"moisture": ("wet",)},
        refined_diagnosis="Overwatering / Root Rot Risk",
        confidence=0.88,
        severity="high",
        action="Stop irrigation immediately. Improve drainage. Check roots.",
        false_positive_prevention="Prevents confusion with disease",
        icon="💦",
        color="#3b82f6",
    ),
    FusionRule(
        id="cold_stress",
        vision_pattern=("discoloration", "stunted_growth"),
        sensor_conditions={"temperature": ("cold",)},
        refined_diagnosis="Cold Stress",
        confidence=0.80,
        severity="medium",
        action="Protect from cold. Wait for warmer weather before major actions.",
        false_positive_prevention="Identifies environmental cause",
        icon="❄️",
        color="#06b6d4",
    ),
)

# Substring -> symptom pattern, first match wins
_VISION_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("blight", "spot"), "spots"),
    (("yellow", "chlorosis"), "yellow_leaves"),
    (("wilt",), "wilting"),
    (("curl",), "leaf_curl"),
    (("healthy", "normal"), "healthy"),
    (("brown",), "browning"),
    (("root",), "root_issues"),
)


def normalize_vision_class(class_name: Any) -> str:
    """Map a detector class label onto one of the symptom patterns the rules use."""
    if not class_name or not isinstance(class_name, str):
        return "unknown"
    normalized = class_name.lower().strip()
    if not normalized:
        return "unknown"

    for keywords, pattern in _VISION_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return pattern
    return re.sub(r"[^a-z]", "_", normalized)


def match_sensor_condition(actual: str, expected: Sequence[str] | str | None) -> bool:
    if not expected:
        return True
    if isinstance(expected, str):
        return actual == expected
    return actual in expected


def _rule_matches(rule: FusionRule, pattern: str, categories: SensorCategories) -> bool:
    if pattern not in rule.vision_pattern:
        return False
    return all(
        match_sensor_condition(categories.get(group).category, accepted)
        for group, accepted in rule.sensor_conditions.items()
    )


def perform_fusion(detection: Detection | None, sensor_data: SensorSnapshot | None) -> FusionResult:
    """Fuse one detection with the sensor snapshot."""
    if detection is None:
        return FusionResult(status=FusionStatus.NO_VISION_DATA, message="No vision detection available")

    class_name = detection.class_name or "unknown"
    confidence = detection.confidence or 0.5
    vision_input = {"class": class_name, "confidence": confidence}

    if sensor_data is None:
        return FusionResult(
            status=FusionStatus.NO_SENSOR_DATA,
            message="Sensor data unavailable - using vision only",
            diagnosis=Diagnosis(
                refined_diagnosis=None,
                severity="none",
                confidence=confidence,
                action="Limited context - verify manually",
                source="vision_only",
                vision_input=vision_input,
            ),
        )

    categories = categorize_sensor_data(sensor_data)
    pattern = normalize_vision_class(class_name)
    matched = [rule for rule in FUSION_RULES if _rule_matches(rule, pattern, categories)]

    if matched:
        best = max(matched, key=lambda rule: rule.confidence)
        return FusionResult(
            status=FusionStatus.FUSION_SUCCESS,
            message="Multimodal diagnosis complete",
            diagnosis=Diagnosis(
                refined_diagnosis=best.refined_diagnosis,
                severity=best.severity,
                confidence=best.confidence,
                action=best.action,
                icon=best.icon,
                color=best.color,
                rule_id=best.id,
                false_positive_prevention=best.false_positive_prevention,
                vision_input=vision_input,
                sensor_input=categories.to_dict(),
                timestamp=iso_now(),
            ),
        )

    return FusionResult(
        status=FusionStatus.UNCERTAIN,
        message="Conflicting signals - manual verification recommended",
        diagnosis=Diagnosis(
            refined_diagnosis="Uncertain - Multiple Factors",
            severity="unknown",
            confidence=0.50,
            action="Manual inspection recommended. Vision and sensor data conflict.",
            icon="❓",
            color="#6b7280",
            vision_input=vision_input,
            sensor_input=categories.to_dict(),
        ),
    )


def perform_batch_fusion(
    records: Sequence[DetectionRecord] | None,
    sensor_data: SensorSnapshot | None,
) -> list[FusionResult]:
    """Fuse the primary detection of every record; records that fail are logged and dropped."""
    results: list[FusionResult] = []
    for record in records or ():
        try:
            result = perform_fusion(record.primary_detection, sensor_data)
        except Exception as e:
            logger.error("Fusion error for detection %s: %s", record.id, e, exc_info=True)
            continue
        results.append(
            FusionResult(
                status=result.status,
                message=result.message,
                diagnosis=result.diagnosis,
                detection_id=record.id,
                timestamp=record.timestamp or iso_now(),
            )
        )
    return results


def get_fusion_stats(results: Sequence[FusionResult] | None) -> dict[str, Any]:
    if not results:
        return {
            "total": 0,
            "successful": 0,
            "uncertain": 0,
            "vision_only": 0,
            "fusion_rate": 0.0,
            "diagnosis_counts": {},
            "most_common": "None",
        }

    total = len(results)
    successful = sum(1 for r in results if r.status == FusionStatus.FUSION_SUCCESS)
    uncertain = sum(1 for r in results if r.status == FusionStatus.UNCERTAIN)
    vision_only = sum(1 for r in results if r.status == FusionStatus.NO_SENSOR_DATA)

    diagnosis_counts: dict[str, int] = {}
    for result in results:
        if result.diagnosis and result.diagnosis.refined_diagnosis:
            name = result.diagnosis.refined_diagnosis
            diagnosis_counts[name] = diagnosis_counts.get(name, 0) + 1

    most_common = max(diagnosis_counts.items(), key=lambda item: item[1])[0] if diagnosis_counts else "None"
    return {
        "total": total,
        "successful": successful,
        "uncertain": uncertain,
        "vision_only": vision_only,
        "fusion_rate": round(successful / total * 100, 1),
        "diagnosis_counts": diagnosis_counts,
        "most_common": most_common,
    }


# ------------------------------------------------------------------
# Edge cases
# ------------------------------------------------------------------


def handle_missing_sensor_data(detection: Detection | None) -> FusionResult:
    """Vision-only diagnosis with reduced confidence."""
    class_name = detection.class_name if detection and detection.class_name else "Unknown"
    confidence = detection.confidence if detection and detection.confidence else 0.5
    return FusionResult(
        status=FusionStatus.SENSOR_UNAVAILABLE,
        message="Sensor data unavailable",
        diagnosis=Diagnosis(
            refined_diagnosis=f"{class_name} (Vision Only)",
            severity="uncertain",
            confidence=confidence * 0.8,
            action="Sensor data unavailable. Manual verification recommended before action.",
            icon="⚠️",
            color="#f59e0b",
            source="vision_only",
            limitation="Limited context without environmental data",
        ),
    )


def detect_conflict(vision_pattern: str | None, categories: SensorCategories | None) -> dict[str, Any]:
    """Spot vision/sensor disagreement that warrants a manual inspection."""
    if not vision_pattern or categories is None:
        return {"has_conflict": False}

    if (
        vision_pattern != "healthy"
        and categories.moisture.category == "optimal"
        and categories.temperature.category == "optimal"
        and categories.humidity.category == "moderate"
    ):
        return {
            "has_conflict": True,
            "message": "Vision and sensor data conflict - possible edge case",
            "recommendation": "Manual inspection strongly recommended",
        }

    if vision_pattern == "healthy" and ReadingStatus.WARNING in (
        categories.moisture.status,
        categories.temperature.status,
    ):
        return {
            "has_conflict": True,
            "message": "Plant appears healthy but stress conditions detected",
            "recommendation": "Monitor closely - early intervention may be needed",
        }

    return {"has_conflict": False}


def perform_robust_fusion(
    detection: Detection | None,
    sensor_data: SensorSnapshot | None,
    *,
    max_age_minutes: float | None = None,
    now: datetime | None = None,
) -> FusionResult:
    """Fusion with sensor validation, staleness and conflict checks folded into the result."""
    if detection is None:
        return FusionResult(status=FusionStatus.ERROR, message="No vision detection provided")
    if sensor_data is None:
        return handle_missing_sensor_data(detection)

    validation = validate_sensor_data(sensor_data)
    if not validation.valid:
        return FusionResult(
            status=FusionStatus.SENSOR_ERROR,
            message="; ".join(validation.errors),
            diagnosis=handle_missing_sensor_data(detection).diagnosis,
            metadata={"validation": validation.to_dict()},
        )

    freshness_kwargs: dict[str, Any] = {"now": now}
    if max_age_minutes is not None:
        freshness_kwargs["max_age_minutes"] = max_age_minutes
    freshness = check_sensor_freshness(sensor_data, **freshness_kwargs)

    result = perform_fusion(detection, sensor_data)
    conflict = detect_conflict(normalize_vision_class(detection.class_name), categorize_sensor_data(sensor_data))

    warnings = list(validation.warnings)
    if not freshness.fresh and freshness.warning:
        warnings.append(freshness.warning)
    if conflict.get("has_conflict"):
        warnings.append(conflict["message"])

    return FusionResult(
        status=result.status,
        message=result.message,
        diagnosis=result.diagnosis,
        warnings=tuple(warnings),
        metadata={
            "validation": validation.to_dict(),
            "freshness": freshness.to_dict(),
            "conflict": conflict,
        },
    )


class FusionEngine:
    """Object facade used by the field monitor; satisfies ``FusionProvider``."""

    def fuse(self, detection: Detection | None, sensor_data: SensorSnapshot | None) -> FusionResult:
        return perform_fusion(detection, sensor_data)

    def fuse_batch(
        self,
        detections: Sequence[DetectionRecord],
        sensor_data: SensorSnapshot | None,
    ) -> list[FusionResult]:
        return perform_batch_fusion(detections, sensor_data)
