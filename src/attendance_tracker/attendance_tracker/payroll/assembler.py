"""Report assembly: applies UI-side filter state to aggregated payroll months."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..common.datetime_utils import end_of_day, parse_iso_date, start_of_day
from ..core.constants import ALL_EMPLOYEES
from ..core.exceptions import ValidationError
from .model import EmployeeAggregate, MonthlyReport

REQUIRED_PREFIX = "required."


@dataclass(frozen=True)
class ReportFilter:
    """Filter state of the reports screen.

    ``employee`` is ``"all"`` or an exact display name. Dates are
    ``YYYY-MM-DD`` strings; ``date_to`` includes the whole day.
    ``required_hours`` maps employee name to target hours (missing = 0).
    """

    employee: str = ALL_EMPLOYEES
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    required_hours: Dict[str, float] = field(default_factory=dict)

    def range(self) -> tuple[Optional[datetime], Optional[datetime]]:
        try:
            from_ = start_of_day(parse_iso_date(self.date_from)) if self.date_from else None
            to = end_of_day(parse_iso_date(self.date_to)) if self.date_to else None
        except ValueError:
            raise ValidationError("Dates must be in YYYY-MM-DD format") from None
        return from_, to

    def required_for(self, name: str) -> float:
        return float(self.required_hours.get(name, 0.0) or 0.0)

    def matches(self, name: str) -> bool:
        return self.employee == ALL_EMPLOYEES or self.employee == name

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "ReportFilter":
        """Build a filter from request query parameters.

        Required hours come either as a JSON object in ``required_hours`` or
        as repeated ``required.<name>=<hours>`` parameters.
        """

        required: Dict[str, float] = {}
        raw_json = args.get("required_hours")
        if raw_json:
            try:
                decoded = json.loads(raw_json) if isinstance(raw_json, str) else raw_json
            except ValueError:
                raise ValidationError("required_hours must be a JSON object") from None
            if not isinstance(decoded, Mapping):
                raise ValidationError("required_hours must be a JSON object")
            for name, hours in decoded.items():
                required[str(name)] = _hours(hours, name)

        for key in args.keys():
            if key.startswith(REQUIRED_PREFIX):
                name = key[len(REQUIRED_PREFIX):]
                required[name] = _hours(args.get(key), name)

        report_filter = cls(
            employee=(args.get("employee") or ALL_EMPLOYEES).strip() or ALL_EMPLOYEES,
            date_from=(args.get("from") or "").strip() or None,
            date_to=(args.get("to") or "").strip() or None,
            required_hours=required,
        )
        report_filter.range()
        return report_filter


def _hours(value: Any, name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Required hours for {name} must be a number") from None
    if not math.isfinite(hours):
        raise ValidationError(f"Required hours for {name} must be a number")
    return hours


@dataclass(frozen=True)
class ReportSummary:
    month: str
    month_index: int
    year: int
    employees: List[dict]
    total_shifts: int
    total_hours: float
    total_difference: float

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "month_index": self.month_index,
            "year": self.year,
            "employees": self.employees,
            "total_shifts": self.total_shifts,
            "total_hours": round(self.total_hours, 2),
            "total_difference": round(self.total_difference, 2),
        }


def _employee_row(emp: EmployeeAggregate, required: float) -> dict:
    row = emp.to_dict()
    row["required_hours"] = required
    row["difference"] = round(emp.total_hours - required, 2)
    return row


def summarize(report: MonthlyReport, report_filter: ReportFilter) -> ReportSummary:
    employees = [e for e in report.employees if report_filter.matches(e.name)]
    return ReportSummary(
        month=report.month,
        month_index=report.month_index,
        year=report.year,
        employees=[_employee_row(e, report_filter.required_for(e.name)) for e in employees],
        total_shifts=sum(e.shift_count for e in employees),
        total_hours=sum(e.total_hours for e in employees),
        total_difference=sum(e.total_hours - report_filter.required_for(e.name) for e in employees),
    )


def assemble(reports: Iterable[MonthlyReport], report_filter: Optional[ReportFilter] = None) -> list[ReportSummary]:
    """Per-bucket totals over the filtered employee subset, in input order."""

    report_filter = report_filter or ReportFilter()
    return [summarize(r, report_filter) for r in reports]
