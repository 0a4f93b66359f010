"""
Fusion Domain Objects
=====================
Refined diagnoses produced by combining a vision detection with a sensor
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cropscout.enums import FusionStatus


@dataclass(frozen=True)
class Diagnosis:
    """
    Context-aware diagnosis for one detection.

    Attributes:
        refined_diagnosis: Human-readable diagnosis, e.g. "Drought Stress";
            None for vision-only results
        severity: none / low / medium / high, or unknown / uncertain when unresolved
        confidence: Confidence score (0-1)
        action: Recommended field action
        rule_id: Fusion rule that produced it (None when no rule matched)
        source: "fusion" or "vision_only"
    """

    refined_diagnosis: str | None
    severity: str
    confidence: float
    action: str = ""
    icon: str = ""
    color: str = ""
    rule_id: str | None = None
    false_positive_prevention: str | None = None
    source: str = "fusion"
    vision_input: dict[str, Any] = field(default_factory=dict)
    sensor_input: dict[str, Any] = field(default_factory=dict)
    limitation: str | None = None
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "refined_diagnosis": self.refined_diagnosis,
            "severity": self.severity,
            "confidence": round(self.confidence, 3),
            "action": self.action,
            "icon": self.icon,
            "color": self.color,
            "rule_id": self.rule_id,
            "false_positive_prevention": self.false_positive_prevention,
            "source": self.source,
            "vision_input": dict(self.vision_input),
            "sensor_input": dict(self.sensor_input),
            "limitation": self.limitation,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class FusionResult:
    """Outcome of fusing one detection; ``diagnosis`` is None when fusion was impossible."""

    status: FusionStatus
    message: str
    diagnosis: Diagnosis | None = None
    detection_id: str | None = None
    timestamp: str | None = None
    warnings: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "diagnosis": self.diagnosis.to_dict() if self.diagnosis else None,
            "detection_id": self.detection_id,
            "timestamp": self.timestamp,
            "warnings": list(self.warnings),
            "metadata": dict(self.metadata),
        }
