import json
from datetime import datetime, timedelta

import pytest

from src.attendance_tracker.attendance_tracker.attendance.local_attendance_repository import LocalAttendanceRepository
from src.attendance_tracker.attendance_tracker.attendance.model import GeoPoint
from src.attendance_tracker.attendance_tracker.core.exceptions import StoreError
from src.attendance_tracker.attendance_tracker.database.local_store import LocalDocumentStore


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_checkin_and_checkout_store_timestamps_and_duration(tmp_path, fixed_now):
    clock = Clock(fixed_now)
    repo = LocalAttendanceRepository(LocalDocumentStore(tmp_path / "store.json"), clock=clock)

    record_id = repo.create_checkin("u1", "Ann", location=GeoPoint(lat=1.0, lng=2.0))
    clock.now = fixed_now + timedelta(hours=7, minutes=30)
    assert repo.update_checkout(record_id, needs_review=True) is True

    rec = repo.get_by_id(record_id)
    assert rec.check_in == fixed_now
    assert rec.check_out == fixed_now + timedelta(hours=7, minutes=30)
    assert rec.duration_minutes == 450
    assert rec.needs_review is True
    assert rec.location == GeoPoint(lat=1.0, lng=2.0)


def test_checkout_of_closed_record_is_rejected(tmp_path, fixed_now):
    repo = LocalAttendanceRepository(LocalDocumentStore(tmp_path / "store.json"), clock=Clock(fixed_now))
    record_id = repo.create_checkin("u1", "Ann")

    assert repo.update_checkout(record_id) is True
    assert repo.update_checkout(record_id) is False
    assert repo.update_checkout("missing") is False


def test_fetch_for_user_is_newest_first_and_skips_malformed(tmp_path, fixed_now):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "attendance": [
                    {"id": "a", "userId": "u1", "checkIn": "2024-03-01T08:00:00"},
                    {"id": "b", "userId": "u1", "checkIn": "2024-03-02T08:00:00"},
                    {"id": "c", "userId": "u1", "checkIn": "garbage"},
                    {"id": "d", "userId": "u2", "checkIn": 1709280000000},
                ]
            }
        ),
        encoding="utf-8",
    )
    repo = LocalAttendanceRepository(LocalDocumentStore(path), clock=Clock(fixed_now))

    assert [r.record_id for r in repo.fetch_for_user("u1")] == ["b", "a"]
    assert len(repo.fetch_all()) == 3


def test_correct_record_recomputes_duration(tmp_path, fixed_now):
    repo = LocalAttendanceRepository(LocalDocumentStore(tmp_path / "store.json"), clock=Clock(fixed_now))
    record_id = repo.create_checkin("u1", "Ann")

    assert repo.correct_record(record_id, check_in=fixed_now, check_out=fixed_now + timedelta(hours=2)) is True
    assert repo.get_by_id(record_id).duration_minutes == 120
    assert repo.correct_record("missing", check_in=fixed_now, check_out=None) is False


def test_unreadable_store_raises_store_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    repo = LocalAttendanceRepository(LocalDocumentStore(path))

    with pytest.raises(StoreError):
        repo.fetch_all()


def test_out_of_range_epoch_does_not_break_fetch(tmp_path, fixed_now):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "attendance": [
                    {"id": "bad", "userId": "u1", "checkIn": 1e300},
                    {"id": "ok", "userId": "u1", "checkIn": "2024-03-01T08:00:00"},
                ]
            }
        ),
        encoding="utf-8",
    )
    repo = LocalAttendanceRepository(LocalDocumentStore(path), clock=Clock(fixed_now))

    assert [r.record_id for r in repo.fetch_all()] == ["ok"]
