"""Attendance state resolution.

Pure functions over records that were already fetched from the store: which
shifts are active, which open records are stale, and what a record's
authoritative duration is. Nothing here performs I/O or raises on empty input.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_elapsed, minutes_between
from ..core.constants import STALE_AFTER_HOURS
from ..core.enums import RecordStatus
from ..users.model import User
from .model import ActiveShift, AttendanceRecord

STALE_AFTER = timedelta(hours=STALE_AFTER_HOURS)


def is_stale(record: AttendanceRecord, now: datetime) -> bool:
    """Open for longer than 24 hours. Advisory only, never closes anything."""

    return record.is_open and (now - record.check_in) > STALE_AFTER


def latest_open_by_user(records: Iterable[AttendanceRecord]) -> dict[str, AttendanceRecord]:
    """Latest-wins: the open record with the greatest check-in per user id.

    The store does not prevent two open records for one user (e.g. check-in
    from two devices); older ones stay in history as anomalies.
    """

    latest: dict[str, AttendanceRecord] = {}
    for r in records:
        if not r.is_open:
            continue
        current = latest.get(r.user_id)
        if current is None or r.check_in > current.check_in:
            latest[r.user_id] = r
    return latest


def resolve_active(
    records: Iterable[AttendanceRecord],
    users: Iterable[User],
    *,
    now: Optional[datetime] = None,
) -> list[ActiveShift]:
    """Active shifts, most recently started first, at most one per user.

    Records whose user is not in ``users`` are left out. When ``now`` is
    given, each shift carries its staleness flag.
    """

    users_by_id = {u.user_id: u for u in users}
    shifts = []
    for user_id, record in latest_open_by_user(records).items():
        user = users_by_id.get(user_id)
        if user is None:
            continue
        stale = is_stale(record, now) if now is not None else False
        shifts.append(ActiveShift(user=user, record=record, is_stale=stale))

    shifts.sort(key=lambda s: s.record.check_in, reverse=True)
    return shifts


def active_record_for(records: Iterable[AttendanceRecord], user_id: str) -> Optional[AttendanceRecord]:
    return latest_open_by_user(r for r in records if r.user_id == user_id).get(user_id)


def effective_duration_minutes(record: AttendanceRecord) -> Optional[float]:
    """Stored duration if it is a valid positive number, else derived from timestamps.

    Open records without a stored duration have no duration (None).
    """

    stored = record.duration_minutes
    if stored is not None and not isinstance(stored, bool) and math.isfinite(stored) and stored > 0:
        return float(stored)
    if record.check_out is None:
        return None
    return minutes_between(record.check_in, record.check_out)


def completed_minutes(record: AttendanceRecord) -> float:
    """Duration for completed-hours totals; open records count as zero."""

    if record.is_open:
        return 0.0
    return effective_duration_minutes(record) or 0.0


def total_tracked_hours(records: Iterable[AttendanceRecord]) -> float:
    return sum(completed_minutes(r) for r in records) / 60.0


def record_status(record: AttendanceRecord, now: datetime) -> RecordStatus:
    if not record.is_open:
        return RecordStatus.COMPLETED
    if is_stale(record, now):
        return RecordStatus.STALE
    return RecordStatus.IN_PROGRESS


def elapsed_label(record: AttendanceRecord, now: datetime) -> str:
    return format_elapsed(now - record.check_in)


def history_rows(records: Sequence[AttendanceRecord], now: datetime) -> list[dict]:
    """Timesheet rows for one user's history table."""

    rows = []
    for r in records:
        minutes = effective_duration_minutes(r) if not r.is_open else None
        rows.append(
            {
                "id": r.record_id,
                "date": r.check_in.strftime("%Y-%m-%d"),
                "weekday": r.check_in.strftime("%A"),
                "check_in": r.check_in.strftime("%H:%M"),
                "check_out": r.check_out.strftime("%H:%M") if r.check_out else "---",
                "hours": f"{minutes / 60:.2f}" if minutes else "--",
                "status": record_status(r, now).value,
                "needs_review": r.needs_review,
            }
        )
    return rows
