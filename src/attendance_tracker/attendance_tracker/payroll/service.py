from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import StoreError
from ..users.repository import UserRepository
from .aggregator import aggregate, sort_reports
from .assembler import ReportFilter, ReportSummary, assemble
from .calculator.base import HoursCalculator
from .calculator.timestamp_calculator import TimestampHoursCalculator
from .period import current_period, month_label, period_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    summaries: list[ReportSummary]
    employees: list[str]

    def to_dict(self) -> dict:
        return {
            "reports": [s.to_dict() for s in self.summaries],
            "employees": self.employees,
        }


class PayrollReportService:
    """Store -> aggregator -> assembler.

    Reports are recomputed from the full record set on every call; nothing is
    cached. A failed fetch yields an empty report, retrying is up to the caller.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._calculator = calculator or TimestampHoursCalculator()

    def build_report(self, report_filter: Optional[ReportFilter] = None) -> ReportData:
        report_filter = report_filter or ReportFilter()
        from_, to = report_filter.range()

        try:
            records = self._attendance.fetch_all()
            users = self._users.list_all()
        except StoreError as e:
            logger.warning("Report data fetch failed: %s", e)
            return ReportData(summaries=[], employees=[])

        reports = sort_reports(aggregate(records, users, from_, to, calculator=self._calculator))
        employees = sorted({e.name for r in reports for e in r.employees})
        return ReportData(summaries=assemble(reports, report_filter), employees=employees)

    def current_period_info(self, today: date) -> dict:
        year, month = current_period(today)
        start, end = period_bounds(year, month)
        return {
            "year": year,
            "month": month_label(month),
            "month_index": month,
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
        }
