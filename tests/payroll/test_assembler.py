import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import ValidationError
from src.attendance_tracker.attendance_tracker.payroll.assembler import ReportFilter, assemble
from src.attendance_tracker.attendance_tracker.payroll.model import EmployeeAggregate, MonthlyReport


def _report():
    return MonthlyReport(
        month="March",
        month_index=3,
        year=2024,
        employees=[
            EmployeeAggregate(name="Ann", shift_count=10, total_hours=80.0),
            EmployeeAggregate(name="Bob", shift_count=5, total_hours=42.5, flagged_count=1),
        ],
    )


def test_without_required_hours_difference_equals_hours():
    (summary,) = assemble([_report()], ReportFilter())

    assert summary.total_shifts == 15
    assert summary.total_hours == 122.5
    assert summary.total_difference == summary.total_hours
    assert all(row["required_hours"] == 0.0 for row in summary.employees)


def test_required_hours_produce_per_row_difference():
    report_filter = ReportFilter(required_hours={"Ann": 100, "Bob": 40})

    (summary,) = assemble([_report()], report_filter)

    rows = {row["name"]: row for row in summary.employees}
    assert rows["Ann"]["difference"] == -20.0
    assert rows["Bob"]["difference"] == 2.5
    assert summary.total_difference == -17.5


def test_employee_filter_limits_rows_and_totals():
    (summary,) = assemble([_report()], ReportFilter(employee="Bob"))

    assert [row["name"] for row in summary.employees] == ["Bob"]
    assert summary.total_shifts == 5
    assert summary.total_hours == 42.5


def test_filtering_an_unknown_employee_keeps_empty_bucket():
    (summary,) = assemble([_report()], ReportFilter(employee="Zed"))

    assert summary.employees == []
    assert summary.total_hours == 0


def test_to_date_includes_the_whole_day():
    from_, to = ReportFilter(date_from="2024-03-01", date_to="2024-03-31").range()

    assert from_.hour == 0 and from_.minute == 0
    assert (to.hour, to.minute, to.second) == (23, 59, 59)


def test_from_args_parses_query_parameters():
    report_filter = ReportFilter.from_args(
        {
            "employee": "Ann",
            "from": "2024-03-01",
            "to": "2024-03-31",
            "required_hours": '{"Ann": 160}',
            "required.Bob": "80",
        }
    )

    assert report_filter.employee == "Ann"
    assert report_filter.required_for("Ann") == 160.0
    assert report_filter.required_for("Bob") == 80.0
    assert report_filter.required_for("Zed") == 0.0


@pytest.mark.parametrize(
    "args",
    [
        {"from": "03/01/2024"},
        {"required_hours": "[1, 2]"},
        {"required.Ann": "lots"},
    ],
)
def test_from_args_rejects_bad_input(args):
    with pytest.raises(ValidationError):
        ReportFilter.from_args(args)
