"""Payroll month arithmetic.

A payroll month runs from the 26th of the previous calendar month through the
25th of the month it is named after. A check-in on 26 March therefore belongs
to the April payroll month; one on 25 March belongs to March.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Tuple

from ..core.constants import PAYROLL_CUTOFF_DAY


def payroll_period(moment: date | datetime) -> Tuple[int, int]:
    """(year, month) of the payroll month a check-in belongs to. Month is 1-12."""

    year, month = moment.year, moment.month
    if moment.day >= PAYROLL_CUTOFF_DAY:
        month += 1
        if month == 13:
            month = 1
            year += 1
    return year, month


def period_bounds(year: int, month: int) -> Tuple[date, date]:
    """Inclusive first and last calendar day of a payroll month."""

    end = date(year, month, PAYROLL_CUTOFF_DAY - 1)
    prev_year, prev_month = (year - 1, 12) if month == 1 else (year, month - 1)
    start = date(prev_year, prev_month, PAYROLL_CUTOFF_DAY)
    return start, end


def current_period(today: date) -> Tuple[int, int]:
    return payroll_period(today)


def month_label(month: int) -> str:
    return calendar.month_name[month]
