"""
Signal Snapshot
===============
The flat set of values the alert rules are evaluated against. Rebuilt on
every evaluation cycle and never carried across cycles.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from cropscout.constants import SignalDefaults
from cropscout.utils.time import iso_now


@dataclass(frozen=True)
class Signals:
    """
    Attributes:
        infection_percentage: Share of grid cells with detections (0-100)
        roi_ratio: Benefit/cost multiplier of one precision spray mission
        potential_loss: Revenue lost if untreated
        soil_moisture: %
        soil_temperature: °C
        air_humidity: %
        fusion_severity: Severity of the most recent fused diagnosis
        fusion_diagnosis: Most recent refined diagnosis text
        fusion_confidence: Confidence of that diagnosis (0-1)
        infection_growth_rate: Estimated spread in %/hour (heuristic)
    """

    infection_percentage: float = SignalDefaults.INFECTION_PERCENTAGE
    infected_count: int = 0
    total_cells: int = 0
    roi_ratio: float = SignalDefaults.ROI_RATIO
    potential_loss: float = SignalDefaults.POTENTIAL_LOSS
    soil_moisture: float = SignalDefaults.SOIL_MOISTURE
    soil_temperature: float = SignalDefaults.SOIL_TEMPERATURE
    air_humidity: float = SignalDefaults.AIR_HUMIDITY
    fusion_severity: str = SignalDefaults.FUSION_SEVERITY
    fusion_diagnosis: str = SignalDefaults.FUSION_DIAGNOSIS
    fusion_confidence: float = SignalDefaults.FUSION_CONFIDENCE
    infection_growth_rate: float = 0.0
    timestamp: str = field(default_factory=iso_now)

    def diagnosis_mentions(self, keyword: str) -> bool:
        """Case-insensitive substring test on the fused diagnosis."""
        return bool(self.fusion_diagnosis) and keyword.lower() in self.fusion_diagnosis.lower()

    def to_dict(self) -> dict:
        return asdict(self)
