from datetime import date, datetime

import pytest

from src.attendance_tracker.attendance_tracker.payroll.period import (
    month_label,
    payroll_period,
    period_bounds,
)


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2024, 3, 25, 23, 59), (2024, 3)),
        (datetime(2024, 3, 26, 0, 0), (2024, 4)),
        (datetime(2024, 3, 1, 8, 0), (2024, 3)),
        (datetime(2024, 12, 26, 9, 0), (2025, 1)),
        (datetime(2024, 12, 31, 9, 0), (2025, 1)),
        (datetime(2024, 1, 26, 9, 0), (2024, 2)),
        (date(2024, 2, 29), (2024, 3)),
    ],
)
def test_payroll_period_cutoff_on_the_26th(moment, expected):
    assert payroll_period(moment) == expected


def test_period_bounds_span_26th_to_25th():
    assert period_bounds(2024, 4) == (date(2024, 3, 26), date(2024, 4, 25))
    assert period_bounds(2025, 1) == (date(2024, 12, 26), date(2025, 1, 25))


def test_month_label_is_english_month_name():
    assert month_label(1) == "January"
    assert month_label(12) == "December"
