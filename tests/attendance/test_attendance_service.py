from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord, GeoPoint
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AuthorizationError,
    NoActiveSessionError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)
from src.attendance_tracker.attendance_tracker.projects.model import Geofence, Project
from src.attendance_tracker.attendance_tracker.projects.service import ProjectService
from src.attendance_tracker.attendance_tracker.users.model import SessionUser, User

SITE = GeoPoint(lat=10.7769, lng=106.7009)
FAR_AWAY = GeoPoint(lat=10.8231, lng=106.6297)


class InMemoryAttendance:
    def __init__(self, now: datetime):
        self.now = now
        self.records: dict[str, AttendanceRecord] = {}
        self._id = 0

    def fetch_all(self):
        return sorted(self.records.values(), key=lambda r: r.check_in, reverse=True)

    def fetch_for_user(self, user_id: str):
        return [r for r in self.fetch_all() if r.user_id == user_id]

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def create_checkin(self, user_id, user_name, *, location=None, project_id=None) -> str:
        self._id += 1
        record_id = f"r{self._id}"
        self.records[record_id] = AttendanceRecord(
            record_id=record_id,
            user_id=user_id,
            user_name=user_name,
            check_in=self.now,
            location=location,
            project_id=project_id,
        )
        return record_id

    def update_checkout(self, record_id, *, location=None, needs_review=False) -> bool:
        rec = self.records.get(record_id)
        if rec is None or rec.check_out is not None:
            return False
        self.records[record_id] = replace(
            rec, check_out=self.now, check_out_location=location, needs_review=needs_review
        )
        return True

    def correct_record(self, record_id, *, check_in, check_out) -> bool:
        rec = self.records.get(record_id)
        if rec is None:
            return False
        self.records[record_id] = replace(rec, check_in=check_in, check_out=check_out, duration_minutes=None)
        return True


class FailingAttendance(InMemoryAttendance):
    def fetch_all(self):
        raise StoreError("connection refused")

    def fetch_for_user(self, user_id: str):
        raise StoreError("connection refused")


class InMemoryUsers:
    def __init__(self, users):
        self.users = {u.user_id: u for u in users}

    def list_all(self):
        return list(self.users.values())

    def get_by_id(self, user_id):
        return self.users.get(user_id)


class InMemoryProjects:
    def __init__(self, projects):
        self.projects = {p.project_id: p for p in projects}

    def list_all(self):
        return list(self.projects.values())

    def get_by_id(self, project_id):
        return self.projects.get(project_id)


ANN = User(user_id="u1", name="Ann", role=Role.EMPLOYEE)
ADMIN = User(user_id="a1", name="Boss", role=Role.ADMIN)
ANN_SESSION = SessionUser(user_id="u1", name="Ann", role=Role.EMPLOYEE)
ADMIN_SESSION = SessionUser(user_id="a1", name="Boss", role=Role.ADMIN)


def _service(fixed_now, projects=(), attendance=None):
    attendance = attendance or InMemoryAttendance(fixed_now)
    svc = AttendanceService(attendance, InMemoryUsers([ANN, ADMIN]), ProjectService(InMemoryProjects(projects)))
    return svc, attendance


def _site(enabled=True):
    return Project(
        project_id="p1",
        name="Site",
        geofence=Geofence(lat=SITE.lat, lng=SITE.lng, radius=100.0, enabled=enabled),
        assigned_user_ids=("u1",),
    )


def test_check_in_then_check_out_closes_active_record(fixed_now):
    svc, repo = _service(fixed_now)

    record_id = svc.check_in(ANN_SESSION)
    assert svc.current_record("u1").record_id == record_id

    repo.now = fixed_now + timedelta(hours=8)
    assert svc.check_out(ANN_SESSION) == record_id
    assert svc.current_record("u1") is None
    assert svc.history("u1", now=repo.now)["total_hours"] == 8.0


def test_check_out_without_active_shift_raises(fixed_now):
    svc, _ = _service(fixed_now)
    with pytest.raises(NoActiveSessionError):
        svc.check_out(ANN_SESSION)


def test_second_check_in_is_allowed_and_latest_wins(fixed_now):
    svc, repo = _service(fixed_now)
    svc.check_in(ANN_SESSION)
    repo.now = fixed_now + timedelta(minutes=30)
    second = svc.check_in(ANN_SESSION)

    assert svc.current_record("u1").record_id == second
    assert [s.record.record_id for s in svc.active_shifts(now=repo.now)] == [second]


def test_check_in_outside_geofence_is_rejected(fixed_now):
    svc, _ = _service(fixed_now, projects=[_site()])

    with pytest.raises(ValidationError):
        svc.check_in(ANN_SESSION, location=FAR_AWAY)
    with pytest.raises(ValidationError):
        svc.check_in(ANN_SESSION, location=None)

    record_id = svc.check_in(ANN_SESSION, location=SITE)
    assert svc.current_record("u1").project_id == "p1"
    assert record_id


def test_disabled_geofence_accepts_any_location(fixed_now):
    svc, _ = _service(fixed_now, projects=[_site(enabled=False)])
    assert svc.check_in(ANN_SESSION, location=FAR_AWAY)


def test_check_out_outside_geofence_flags_record(fixed_now):
    svc, repo = _service(fixed_now, projects=[_site()])
    record_id = svc.check_in(ANN_SESSION, location=SITE)

    svc.check_out(ANN_SESSION, location=FAR_AWAY)

    assert repo.get_by_id(record_id).needs_review is True


def test_active_shifts_ui_marks_stale_shifts(fixed_now):
    svc, repo = _service(fixed_now)
    svc.check_in(ANN_SESSION)

    rows = svc.active_shifts_ui(now=fixed_now + timedelta(hours=25))

    assert rows[0]["name"] == "Ann"
    assert rows[0]["stale"] is True
    assert rows[0]["elapsed"] == "25h 0m"


def test_correct_record_requires_admin(fixed_now):
    svc, _ = _service(fixed_now)
    record_id = svc.check_in(ANN_SESSION)

    with pytest.raises(AuthorizationError):
        svc.correct_record(ANN_SESSION, record_id, check_in=fixed_now)


def test_correct_record_validates_order_and_id(fixed_now):
    svc, repo = _service(fixed_now)
    record_id = svc.check_in(ANN_SESSION)

    with pytest.raises(ValidationError):
        svc.correct_record(ADMIN_SESSION, record_id, check_in=fixed_now, check_out=fixed_now - timedelta(hours=1))
    with pytest.raises(RecordNotFoundError):
        svc.correct_record(ADMIN_SESSION, "missing", check_in=fixed_now)

    svc.correct_record(ADMIN_SESSION, record_id, check_in=fixed_now, check_out=fixed_now + timedelta(hours=4))
    assert repo.get_by_id(record_id).check_out == fixed_now + timedelta(hours=4)


def test_read_models_degrade_to_empty_on_store_failure(fixed_now):
    svc, _ = _service(fixed_now, attendance=FailingAttendance(fixed_now))

    assert svc.active_shifts(now=fixed_now) == []
    assert svc.history("u1", now=fixed_now) == {"rows": [], "total_hours": 0.0}
    assert svc.current_record("u1") is None
