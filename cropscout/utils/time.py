"""UTC time helpers for detection, sensor and alert timestamps.

Timestamps are timezone-aware UTC and serialized as ISO-8601 with an
explicit "+00:00" offset. Alert ids and debounce bookkeeping use epoch
milliseconds.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_now() -> str:
    return utc_now().isoformat()


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def coerce_datetime(value: Any) -> datetime | None:
    """
    Parse a sensor or detection timestamp into an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings, including the "Z" suffix the
    field sensors send. Anything unparseable yields None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
