"""
Alert Pipeline
==============
signal extraction -> rule evaluation -> conflict resolution -> debouncing.

The pipeline is re-run from scratch on every input change; the injected
debouncer is the only state carried between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from cropscout.domain.alerts import Alert, Rule
from cropscout.domain.detections import DetectionRecord
from cropscout.domain.economics import EconomicImpact
from cropscout.domain.field_grid import GridStats
from cropscout.domain.fusion import FusionResult
from cropscout.domain.sensors import SensorSnapshot
from cropscout.domain.signals import Signals
from cropscout.services.conflict_resolver import resolve_conflicts
from cropscout.services.debouncer import AlertDebouncer
from cropscout.services.decision_rules import DECISION_RULES
from cropscout.services.rule_engine import evaluate_alerts
from cropscout.services.signal_extractor import extract_signals
from cropscout.utils.time import utc_now

logger = logging.getLogger(__name__)


@dataclass
class AlertPipelineResult:
    """All intermediate stages of one evaluation cycle."""

    signals: Signals
    candidates: list[Alert] = field(default_factory=list)
    resolved: list[Alert] = field(default_factory=list)
    emitted: list[Alert] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "signals": self.signals.to_dict(),
            "candidates": [a.to_dict() for a in self.candidates],
            "resolved": [a.to_dict() for a in self.resolved],
            "emitted": [a.to_dict() for a in self.emitted],
        }


class AlertPipeline:
    """Runs one full alert evaluation cycle."""

    def __init__(
        self,
        debouncer: AlertDebouncer | None = None,
        rules: Sequence[Rule] = DECISION_RULES,
    ) -> None:
        self.debouncer = debouncer or AlertDebouncer()
        self.rules = tuple(rules)

    def evaluate(self, signals: Signals, *, now: datetime | None = None) -> AlertPipelineResult:
        now = now or utc_now()
        candidates = evaluate_alerts(signals, self.rules, now=now)
        resolved = resolve_conflicts(candidates)
        emitted = self.debouncer.filter(resolved)
        logger.info(
            "Alert cycle: %d candidate(s), %d after conflict resolution, %d emitted",
            len(candidates),
            len(resolved),
            len(emitted),
        )
        return AlertPipelineResult(signals=signals, candidates=candidates, resolved=resolved, emitted=emitted)

    def run(
        self,
        detections: Sequence[DetectionRecord] | None = None,
        grid_stats: GridStats | None = None,
        economic_impact: EconomicImpact | None = None,
        fusion_results: Sequence[FusionResult] | None = None,
        sensor_data: SensorSnapshot | None = None,
        *,
        now: datetime | None = None,
    ) -> AlertPipelineResult:
        now = now or utc_now()
        signals = extract_signals(
            detections,
            grid_stats,
            economic_impact,
            fusion_results,
            sensor_data,
            timestamp=now.isoformat(),
        )
        return self.evaluate(signals, now=now)

    def reset(self) -> None:
        self.debouncer.reset()
