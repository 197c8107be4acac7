from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, format_hhmm, load_json_list
from .model import ShiftSchedule
from .repository import ShiftRepository

_SELECT = """
    SELECT schedule_id, name, start_time, end_time, working_days, assigned_user_ids, disable_auto_close
    FROM shift_schedules
"""


def _to_schedule(r: dict) -> ShiftSchedule:
    return ShiftSchedule(
        schedule_id=str(r["schedule_id"]),
        name=r["name"],
        start_time=format_hhmm(r["start_time"]),
        end_time=format_hhmm(r["end_time"]),
        working_days=tuple(load_json_list(r.get("working_days"))),
        assigned_user_ids=tuple(load_json_list(r.get("assigned_user_ids"))),
        disable_auto_close=bool(r.get("disable_auto_close")),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY start_time, name")
            return [_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: str) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE schedule_id=%s", (str(schedule_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def save(self, schedule: ShiftSchedule) -> str:
        schedule_id = schedule.schedule_id or uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_schedules(
                    schedule_id, name, start_time, end_time, working_days, assigned_user_ids, disable_auto_close
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), start_time=VALUES(start_time), end_time=VALUES(end_time),
                    working_days=VALUES(working_days), assigned_user_ids=VALUES(assigned_user_ids),
                    disable_auto_close=VALUES(disable_auto_close)
                """,
                (
                    schedule_id,
                    schedule.name,
                    schedule.start_time,
                    schedule.end_time,
                    dump_json_list(schedule.working_days),
                    dump_json_list(schedule.assigned_user_ids),
                    int(schedule.disable_auto_close),
                ),
            )
        return schedule_id

    def delete(self, schedule_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_schedules WHERE schedule_id=%s", (str(schedule_id),))
            return cur.rowcount > 0
