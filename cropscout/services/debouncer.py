"""Alert debouncing: suppresses repeats of the same rule+type within a time window."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from threading import Lock
from typing import Callable, Sequence

from cropscout.constants import ALERT_DEBOUNCE_SECONDS
from cropscout.domain.alerts import Alert
from cropscout.domain.exceptions import ConfigurationError
from cropscout.utils.concurrency import synchronized
from cropscout.utils.time import utc_now

logger = logging.getLogger(__name__)


class AlertDebouncer:
    """Stateful emission filter keyed by ``rule_id`` + alert type.

    An alert passes when its key has never been emitted, or when strictly
    more than ``window_seconds`` have elapsed since the key's last emission;
    passing records the current time for the key. State lives as long as the
    instance, so a single debouncer should be shared by every evaluation
    cycle that feeds the same consumer.

    Args:
        window_seconds: Suppression window (default 30s)
        clock: Returns the current wall-clock time; tests inject a fake
    """

    def __init__(
        self,
        window_seconds: float = ALERT_DEBOUNCE_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if window_seconds < 0:
            raise ConfigurationError(f"Debounce window cannot be negative, got {window_seconds}")
        self.window = timedelta(seconds=window_seconds)
        self._clock = clock
        self._last_shown: dict[str, datetime] = {}
        self._lock = Lock()

    @synchronized
    def should_show_alert(self, alert: Alert) -> bool:
        key = alert.debounce_key
        now = self._clock()
        last_shown = self._last_shown.get(key)

        if last_shown is None or now - last_shown > self.window:
            self._last_shown[key] = now
            return True

        logger.debug("Suppressed alert %s (last shown %s)", key, last_shown.isoformat())
        return False

    def filter(self, alerts: Sequence[Alert]) -> list[Alert]:
        """Return the alerts that pass, recording each emission."""
        return [alert for alert in alerts if self.should_show_alert(alert)]

    @synchronized
    def reset(self) -> None:
        """Forget every recorded emission."""
        self._last_shown.clear()

    @synchronized
    def tracked_keys(self) -> list[str]:
        return sorted(self._last_shown)
