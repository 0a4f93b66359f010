"""
Alert Domain Objects
====================
Rule definitions and the alerts they produce.

Alert text and metadata on a rule template are either a fixed value
(:class:`Static`) or a function of the current signals (:class:`Computed`).
Both resolve through the same ``resolve(signals)`` call when an alert is
instantiated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from cropscout.domain.signals import Signals
from cropscout.enums import AlertType


@dataclass(frozen=True)
class Static:
    """Template value that does not depend on the signals."""

    value: Any

    def resolve(self, signals: Signals) -> Any:
        return self.value


@dataclass(frozen=True)
class Computed:
    """Template value derived from the signals at evaluation time."""

    fn: Callable[[Signals], Any]

    def resolve(self, signals: Signals) -> Any:
        return self.fn(signals)


TemplateValue = Union[Static, Computed]


def _resolve_optional(value: TemplateValue | None, signals: Signals) -> Any:
    return value.resolve(signals) if value is not None else None


@dataclass(frozen=True)
class AlertTemplate:
    """What a rule emits when its condition holds."""

    type: AlertType
    title: str
    message: TemplateValue
    action: str
    timeline: str
    icon: str
    estimated_loss: TemplateValue | None = None
    prevent_mistake: TemplateValue | None = None
    savings_potential: TemplateValue | None = None
    benefit: TemplateValue | None = None

    def resolve_metadata(self, signals: Signals) -> dict[str, Any]:
        return {
            "estimated_loss": _resolve_optional(self.estimated_loss, signals),
            "prevent_mistake": _resolve_optional(self.prevent_mistake, signals),
            "savings_potential": _resolve_optional(self.savings_potential, signals),
            "benefit": _resolve_optional(self.benefit, signals),
        }


@dataclass(frozen=True)
class Rule:
    """
    Condition -> alert entry of the decision table.

    Attributes:
        id: Stable rule identifier (RULE_xxx)
        name: Human-readable rule name
        priority: 1 is most urgent
        condition: Pure predicate over the signal snapshot
        alert: Template instantiated when ``condition`` holds
    """

    id: str
    name: str
    priority: int
    condition: Callable[[Signals], bool]
    alert: AlertTemplate

    def to_dict(self) -> dict[str, Any]:
        """Static description; computed template values are left unresolved."""
        return {
            "id": self.id,
            "name": self.name,
            "priority": self.priority,
            "type": self.alert.type.value,
            "title": self.alert.title,
            "action": self.alert.action,
            "timeline": self.alert.timeline,
            "icon": self.alert.icon,
        }


@dataclass
class Alert:
    """One triggered rule, carrying the full signal snapshot for auditability."""

    id: str
    rule_id: str
    rule_name: str
    priority: int
    type: AlertType
    title: str
    message: str
    action: str
    timeline: str
    icon: str
    timestamp: str
    signals: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def debounce_key(self) -> str:
        return f"{self.rule_id}_{self.type.value}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "priority": self.priority,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
            "timeline": self.timeline,
            "icon": self.icon,
            "timestamp": self.timestamp,
            "signals": dict(self.signals),
            "metadata": dict(self.metadata),
        }
