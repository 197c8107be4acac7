from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class EmployeeAggregate:
    """Per-employee totals inside one payroll month (mutated while aggregating)."""

    name: str
    shift_count: int = 0
    total_hours: float = 0.0
    flagged_count: int = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "shift_count": self.shift_count,
            "total_hours": round(self.total_hours, 2),
            "flagged_count": self.flagged_count,
        }


@dataclass
class MonthlyReport:
    """Derived payroll-month bucket. Never persisted."""

    month: str
    month_index: int
    year: int
    employees: List[EmployeeAggregate] = field(default_factory=list)

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.month_index
