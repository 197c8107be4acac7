from datetime import date, datetime

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.core.exceptions import StoreError
from src.attendance_tracker.attendance_tracker.payroll.assembler import ReportFilter
from src.attendance_tracker.attendance_tracker.payroll.service import PayrollReportService
from src.attendance_tracker.attendance_tracker.users.model import User


class InMemoryAttendance:
    def __init__(self, records):
        self.records = records

    def fetch_all(self):
        return list(self.records)


class InMemoryUsers:
    def __init__(self, users):
        self.users = users

    def list_all(self):
        return list(self.users)


class BrokenAttendance:
    def fetch_all(self):
        raise StoreError("timeout")


def _rec(record_id, user_id, check_in, check_out):
    return AttendanceRecord(record_id=record_id, user_id=user_id, user_name="", check_in=check_in, check_out=check_out)


USERS = [User(user_id="u1", name="Ann"), User(user_id="u2", name="Bob")]
RECORDS = [
    _rec("r1", "u1", datetime(2024, 2, 10, 8, 0), datetime(2024, 2, 10, 16, 0)),
    _rec("r2", "u2", datetime(2024, 2, 26, 8, 0), datetime(2024, 2, 26, 12, 0)),
    _rec("r3", "u1", datetime(2024, 3, 4, 8, 0), datetime(2024, 3, 4, 10, 0)),
]


def test_build_report_runs_the_full_chain():
    svc = PayrollReportService(InMemoryAttendance(RECORDS), InMemoryUsers(USERS))

    data = svc.build_report(ReportFilter(required_hours={"Ann": 2}))

    assert [(s.year, s.month_index) for s in data.summaries] == [(2024, 3), (2024, 2)]
    march, february = data.summaries
    assert sorted(row["name"] for row in march.employees) == ["Ann", "Bob"]
    assert march.total_hours == 6.0
    assert march.total_difference == 4.0
    assert february.total_hours == 8.0
    assert data.employees == ["Ann", "Bob"]


def test_build_report_applies_date_range():
    svc = PayrollReportService(InMemoryAttendance(RECORDS), InMemoryUsers(USERS))

    data = svc.build_report(ReportFilter(date_from="2024-03-01", date_to="2024-03-04"))

    assert len(data.summaries) == 1
    assert data.summaries[0].total_hours == 2.0


def test_store_failure_yields_empty_report():
    svc = PayrollReportService(BrokenAttendance(), InMemoryUsers(USERS))

    data = svc.build_report()

    assert data.to_dict() == {"reports": [], "employees": []}


def test_current_period_info():
    svc = PayrollReportService(InMemoryAttendance([]), InMemoryUsers([]))

    info = svc.current_period_info(date(2024, 12, 27))

    assert info == {
        "year": 2025,
        "month": "January",
        "month_index": 1,
        "start": "2024-12-26",
        "end": "2025-01-25",
    }
