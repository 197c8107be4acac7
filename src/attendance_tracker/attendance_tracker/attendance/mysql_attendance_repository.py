from __future__ import annotations

import json
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, GeoPoint
from .parsing import parse_records
from .repository import AttendanceRepository

_SELECT = """
    SELECT record_id, user_id, user_name, check_in, check_out, duration, project_id,
           location, check_out_location, auto_closed, needs_review
    FROM attendance_records
"""


def _load_point(value: Any) -> Any:
    if value in (None, ""):
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


def _dump_point(point: Optional[GeoPoint]) -> Optional[str]:
    return json.dumps(point.to_dict()) if point else None


def _row_to_raw(row: dict) -> dict:
    return {
        "id": row.get("record_id"),
        "userId": row.get("user_id"),
        "userName": row.get("user_name"),
        "checkIn": row.get("check_in"),
        "checkOut": row.get("check_out"),
        "duration": row.get("duration"),
        "projectId": row.get("project_id"),
        "location": _load_point(row.get("location")),
        "checkOutLocation": _load_point(row.get("check_out_location")),
        "autoClosed": bool(row.get("auto_closed")),
        "needsReview": bool(row.get("needs_review")),
    }


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY check_in DESC")
            rows = fetchall(cur)
        return parse_records(_row_to_raw(r) for r in rows)

    def fetch_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s ORDER BY check_in DESC", (str(user_id),))
            rows = fetchall(cur)
        return parse_records(_row_to_raw(r) for r in rows)

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE record_id=%s", (str(record_id),))
            row = fetchone(cur)
        if not row:
            return None
        parsed = parse_records([_row_to_raw(row)])
        return parsed[0] if parsed else None

    def create_checkin(
        self,
        user_id: str,
        user_name: str,
        *,
        location: Optional[GeoPoint] = None,
        project_id: Optional[str] = None,
    ) -> str:
        record_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(record_id, user_id, user_name, check_in, project_id, location)
                VALUES(%s,%s,%s,NOW(3),%s,%s)
                """,
                (record_id, str(user_id), user_name, project_id, _dump_point(location)),
            )
        return record_id

    def update_checkout(
        self,
        record_id: str,
        *,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=NOW(3),
                    duration=TIMESTAMPDIFF(MICROSECOND, check_in, NOW(3)) / 60000000,
                    check_out_location=%s,
                    needs_review=%s
                WHERE record_id=%s AND check_out IS NULL
                """,
                (_dump_point(location), int(bool(needs_review)), str(record_id)),
            )
            return cur.rowcount > 0

    def correct_record(self, record_id: str, *, check_in: datetime, check_out: Optional[datetime]) -> bool:
        duration = minutes_between(check_in, check_out) if check_out else None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT record_id FROM attendance_records WHERE record_id=%s", (str(record_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, check_out=%s, duration=%s
                WHERE record_id=%s
                """,
                (check_in, check_out, duration, str(record_id)),
            )
            return True
