"""Payroll period aggregation.

Rolls closed attendance records up into payroll-month buckets with
per-employee shift counts and hours. Pure: works on already-fetched
collections and returns fresh objects on every call.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..users.model import User
from .calculator.base import HoursCalculator
from .calculator.timestamp_calculator import TimestampHoursCalculator
from .model import EmployeeAggregate, MonthlyReport
from .period import month_label, payroll_period

logger = logging.getLogger(__name__)


def employee_group_key(record: AttendanceRecord, user: User) -> str:
    """Key that merges records into one employee row.

    Rows are keyed by display name, so two users sharing a name end up in
    one row. Return ``user.user_id`` here to group by identity instead.
    """

    return user.name


def in_range(check_in: datetime, from_: Optional[datetime], to: Optional[datetime]) -> bool:
    if from_ is not None and check_in < from_:
        return False
    if to is not None and check_in > to:
        return False
    return True


def aggregate(
    records: Iterable[AttendanceRecord],
    users: Iterable[User],
    from_: Optional[datetime] = None,
    to: Optional[datetime] = None,
    *,
    calculator: Optional[HoursCalculator] = None,
) -> list[MonthlyReport]:
    """Group closed records into payroll months.

    Only records with a check-out are counted and the date range applies to
    the check-in. Bucket order is unspecified; use ``sort_reports``.
    """

    calculator = calculator or TimestampHoursCalculator()
    users_by_id = {u.user_id: u for u in users}

    buckets: dict[tuple[int, int], MonthlyReport] = {}
    rows: dict[tuple[int, int], dict[str, EmployeeAggregate]] = {}

    for r in records:
        if r.check_out is None:
            continue
        if not in_range(r.check_in, from_, to):
            continue

        user = users_by_id.get(r.user_id)
        if user is None:
            logger.debug("Record %s belongs to unknown user %s; not aggregated", r.record_id, r.user_id)
            continue

        year, month = payroll_period(r.check_in)
        key = (year, month)
        report = buckets.get(key)
        if report is None:
            report = MonthlyReport(month=month_label(month), month_index=month, year=year)
            buckets[key] = report
            rows[key] = {}

        group = employee_group_key(r, user)
        emp = rows[key].get(group)
        if emp is None:
            emp = EmployeeAggregate(name=user.name)
            rows[key][group] = emp
            report.employees.append(emp)

        emp.shift_count += 1
        emp.total_hours += calculator.worked_hours(r)
        if r.needs_review:
            emp.flagged_count += 1

    return list(buckets.values())


def sort_reports(reports: Iterable[MonthlyReport]) -> list[MonthlyReport]:
    """Newest payroll month first: year descending, then calendar month descending."""

    return sorted(reports, key=lambda rep: (rep.year, rep.month_index), reverse=True)
