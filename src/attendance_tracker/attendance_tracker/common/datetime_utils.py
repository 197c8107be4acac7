from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Turn a stored timestamp into a naive local datetime.

    Accepts datetime objects, ISO-8601 strings and epoch milliseconds (what
    the browser-side store writes). Returns None for anything else so callers
    can decide whether the field was required.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _to_naive_local(value)

    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value <= 0:
            return None
        try:
            return datetime.fromtimestamp(value / 1000.0)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _to_naive_local(datetime.fromisoformat(text))
        except (OverflowError, OSError, ValueError):
            return None

    return None


def _to_naive_local(value: datetime) -> Optional[datetime]:
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone().replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        # shifted past datetime.min/max
        return None


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60.0


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def format_elapsed(delta: timedelta) -> str:
    """Format a running duration as '{h}h {m}m'; negative values clamp to zero."""

    total_ms = max(0, int(delta.total_seconds() * 1000))
    hours = total_ms // 3_600_000
    minutes = (total_ms % 3_600_000) // 60_000
    return f"{hours}h {minutes}m"
