"""
Alert Conflict Resolver
=======================
Collapses candidate alerts to at most one per category.

Categorisation is a keyword match on the alert title and lives entirely in
:func:`classify_alert`; resolution only depends on its result.
"""

from __future__ import annotations

from typing import Sequence

from cropscout.domain.alerts import Alert
from cropscout.enums import AlertCategory

# Checked in order; first category with a matching keyword wins
_TITLE_KEYWORDS: tuple[tuple[AlertCategory, tuple[str, ...]], ...] = (
    (AlertCategory.DISEASE, ("Disease", "Infection")),
    (AlertCategory.ENVIRONMENTAL, ("Drought", "Heat", "Humidity")),
    (AlertCategory.ECONOMIC, ("ROI", "Economic")),
)


def classify_alert(alert: Alert) -> AlertCategory:
    """Map an alert to its category from keywords in its title (case-sensitive)."""
    for category, keywords in _TITLE_KEYWORDS:
        if any(keyword in alert.title for keyword in keywords):
            return category
    return AlertCategory.SYSTEM


def resolve_conflicts(alerts: Sequence[Alert]) -> list[Alert]:
    """
    Keep the first alert of each category.

    ``alerts`` must already be sorted by priority, so the first alert seen in
    a category is its most urgent one. Survivors are returned in category
    order: disease, environmental, economic, system.
    """
    if len(alerts) <= 1:
        return list(alerts)

    survivors: dict[AlertCategory, Alert] = {}
    for alert in alerts:
        survivors.setdefault(classify_alert(alert), alert)

    return [survivors[category] for category in AlertCategory if category in survivors]
