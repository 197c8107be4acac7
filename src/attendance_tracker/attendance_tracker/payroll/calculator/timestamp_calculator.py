from __future__ import annotations

from .base import HoursCalculator
from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import hours_between


class TimestampHoursCalculator(HoursCalculator):
    """Standard rule: (check_out - check_in) in hours.

    The stored duration field is ignored; payroll always recomputes from the
    timestamps. Open records count as zero.
    """

    def worked_hours(self, record: AttendanceRecord) -> float:
        if record.check_out is None:
            return 0.0
        return hours_between(record.check_in, record.check_out)
