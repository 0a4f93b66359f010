"""
Fusion-Aware Action Planner
===========================
Decides, per infected cell, *what* the drone should do there based on the
fused diagnosis of the cell's first detection: chemical spray for confirmed
disease, irrigation for drought/heat stress, monitoring for preventive risk,
nothing otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from cropscout.domain.detections import DetectionRecord
from cropscout.domain.field_grid import FieldGrid, GridCell
from cropscout.domain.sensors import SensorSnapshot
from cropscout.enums import SprayAction
from cropscout.services.fusion_engine import perform_fusion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneAction:
    row: int
    col: int
    action: SprayAction
    diagnosis: str | None = None
    severity: str | None = None
    priority: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "action": self.action.value,
            "diagnosis": self.diagnosis,
            "severity": self.severity,
            "priority": self.priority,
        }


@dataclass
class FusionAwarePlan:
    chemical_spray: list[ZoneAction] = field(default_factory=list)
    irrigation: list[ZoneAction] = field(default_factory=list)
    monitoring: list[ZoneAction] = field(default_factory=list)
    no_action: list[ZoneAction] = field(default_factory=list)

    @property
    def total_actionable(self) -> int:
        return len(self.chemical_spray) + len(self.irrigation)

    @staticmethod
    def _high_priority(zones: list[ZoneAction]) -> int:
        return sum(1 for zone in zones if zone.priority == 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "chemical_spray": {
                "zones": [z.to_dict() for z in self.chemical_spray],
                "count": len(self.chemical_spray),
                "high_priority": self._high_priority(self.chemical_spray),
            },
            "irrigation": {
                "zones": [z.to_dict() for z in self.irrigation],
                "count": len(self.irrigation),
                "high_priority": self._high_priority(self.irrigation),
            },
            "monitoring": {
                "zones": [z.to_dict() for z in self.monitoring],
                "count": len(self.monitoring),
            },
            "no_action": {
                "zones": [z.to_dict() for z in self.no_action],
                "count": len(self.no_action),
            },
            "total_actionable": self.total_actionable,
        }


def _primary_record(cell: GridCell, records_by_id: Mapping[str, DetectionRecord]) -> DetectionRecord | None:
    for detection_id in cell.detection_ids:
        record = records_by_id.get(detection_id)
        if record is not None and record.primary_detection is not None:
            return record
    return None


def classify_cell_action(cell: GridCell, diagnosis: str, severity: str) -> ZoneAction:
    urgent = 1 if severity == "high" else 2
    if "Fungal" in diagnosis or "Disease" in diagnosis:
        return ZoneAction(cell.row, cell.col, SprayAction.CHEMICAL_SPRAY, diagnosis, severity, urgent)
    if "Drought" in diagnosis or "Heat" in diagnosis:
        return ZoneAction(cell.row, cell.col, SprayAction.IRRIGATION, diagnosis, severity, urgent)
    if "Risk" in diagnosis or severity == "low":
        return ZoneAction(cell.row, cell.col, SprayAction.MONITOR, diagnosis, severity, 3)
    return ZoneAction(cell.row, cell.col, SprayAction.NONE, diagnosis)


def generate_fusion_aware_path(
    grid: FieldGrid,
    records: Sequence[DetectionRecord],
    sensor_data: SensorSnapshot | None,
) -> FusionAwarePlan:
    """Route every cell of ``grid`` to an action bucket, in row-major order."""
    records_by_id = {record.id: record for record in records}
    plan = FusionAwarePlan()

    for cell in grid.cells():
        record = _primary_record(cell, records_by_id) if cell.infected else None
        if record is None:
            plan.no_action.append(ZoneAction(cell.row, cell.col, SprayAction.NONE))
            continue

        result = perform_fusion(record.primary_detection, sensor_data)
        if result.diagnosis is None:
            plan.no_action.append(ZoneAction(cell.row, cell.col, SprayAction.NONE))
            continue

        zone = classify_cell_action(cell, result.diagnosis.refined_diagnosis or "", result.diagnosis.severity)
        {
            SprayAction.CHEMICAL_SPRAY: plan.chemical_spray,
            SprayAction.IRRIGATION: plan.irrigation,
            SprayAction.MONITOR: plan.monitoring,
            SprayAction.NONE: plan.no_action,
        }[zone.action].append(zone)

    logger.debug(
        "Fusion-aware plan: %d spray, %d irrigate, %d monitor",
        len(plan.chemical_spray),
        len(plan.irrigation),
        len(plan.monitoring),
    )
    return plan


def calculate_fusion_savings(
    vision_infected_count: int,
    plan: FusionAwarePlan,
    *,
    cost_per_cell: float,
    false_positive_cost: float = 0.0,
) -> dict[str, Any]:
    """Chemical cost of spraying every vision positive vs only the fusion-confirmed ones."""
    vision_cost = vision_infected_count * cost_per_cell
    spray_count = len(plan.chemical_spray)
    fusion_cost = spray_count * cost_per_cell
    prevented = (vision_infected_count - spray_count) * false_positive_cost
    chemical_savings = vision_cost - fusion_cost

    return {
        "vision_only_cost": vision_cost,
        "fusion_aware_cost": fusion_cost,
        "chemical_savings": chemical_savings,
        "false_positive_prevention": prevented,
        "total_savings": chemical_savings + prevented,
        "savings_percentage": round(chemical_savings / vision_cost * 100, 1) if vision_cost else 0.0,
    }
