"""
Alert Rule Engine
=================
Evaluates the decision table against a signal snapshot.

Each rule is independent: a rule whose condition or template raises is
logged and skipped, and the remaining rules are still evaluated.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from cropscout.domain.alerts import Alert, Rule
from cropscout.domain.signals import Signals
from cropscout.services.decision_rules import DECISION_RULES
from cropscout.utils.time import epoch_millis, utc_now

logger = logging.getLogger(__name__)


def instantiate_alert(rule: Rule, signals: Signals, now: datetime) -> Alert:
    template = rule.alert
    return Alert(
        id=f"{rule.id}_{epoch_millis(now)}",
        rule_id=rule.id,
        rule_name=rule.name,
        priority=rule.priority,
        type=template.type,
        title=template.title,
        message=str(template.message.resolve(signals)),
        action=template.action,
        timeline=template.timeline,
        icon=template.icon,
        timestamp=now.isoformat(),
        signals=signals.to_dict(),
        metadata=template.resolve_metadata(signals),
    )


def evaluate_alerts(
    signals: Signals,
    rules: Sequence[Rule] = DECISION_RULES,
    *,
    now: datetime | None = None,
) -> list[Alert]:
    """
    Return one alert per triggered rule, sorted by priority (1 first).

    The sort is stable, so rules sharing a priority keep table order.
    """
    now = now or utc_now()
    triggered: list[Alert] = []

    for rule in rules:
        try:
            if rule.condition(signals):
                triggered.append(instantiate_alert(rule, signals, now))
        except Exception as e:
            logger.error("Error evaluating rule %s (%s): %s", rule.id, rule.name, e, exc_info=True)

    triggered.sort(key=lambda alert: alert.priority)
    logger.debug("Rule evaluation triggered %d of %d rules", len(triggered), len(rules))
    return triggered
