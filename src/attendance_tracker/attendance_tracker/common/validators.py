from __future__ import annotations

import re
from typing import Iterable, Optional

from ..core.constants import WEEKDAYS
from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_hhmm(value: str, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not _HHMM.match(value):
        raise ValidationError(f"{field_name} must be in HH:MM format")
    return value


def require_weekdays(values: Iterable[str]) -> list[str]:
    days = []
    for v in values or []:
        if v not in WEEKDAYS:
            raise ValidationError(f"Unknown working day: {v}")
        if v not in days:
            days.append(v)
    # keep Sun..Sat order regardless of input order
    return sorted(days, key=WEEKDAYS.index)


def optional_float(value, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None


def require_float_range(value, field_name: str, lo: float, hi: float) -> float:
    number = optional_float(value, field_name)
    if number is None or not (lo <= number <= hi):
        raise ValidationError(f"{field_name} must be between {lo} and {hi}")
    return number
