from __future__ import annotations

from typing import Optional, Sequence

from ..database.local_store import LocalDocumentStore
from .model import ShiftSchedule
from .repository import ShiftRepository

SHIFT_SCHEDULES = "shiftSchedules"


def _to_schedule(doc: dict) -> ShiftSchedule:
    return ShiftSchedule(
        schedule_id=str(doc["id"]),
        name=doc.get("name") or "",
        start_time=doc.get("startTime") or "",
        end_time=doc.get("endTime") or "",
        working_days=tuple(doc.get("workingDays") or ()),
        assigned_user_ids=tuple(str(u) for u in doc.get("assignedUserIds") or ()),
        disable_auto_close=bool(doc.get("disableAutoClose")),
    )


class LocalShiftRepository(ShiftRepository):
    def __init__(self, store: LocalDocumentStore):
        self._store = store

    def list_all(self) -> Sequence[ShiftSchedule]:
        schedules = [_to_schedule(d) for d in self._store.list(SHIFT_SCHEDULES) if d.get("id")]
        return sorted(schedules, key=lambda s: (s.start_time, s.name))

    def get_by_id(self, schedule_id: str) -> Optional[ShiftSchedule]:
        doc = self._store.get(SHIFT_SCHEDULES, schedule_id)
        return _to_schedule(doc) if doc else None

    def save(self, schedule: ShiftSchedule) -> str:
        return self._store.upsert(
            SHIFT_SCHEDULES,
            {
                "id": schedule.schedule_id,
                "name": schedule.name,
                "startTime": schedule.start_time,
                "endTime": schedule.end_time,
                "workingDays": list(schedule.working_days),
                "assignedUserIds": list(schedule.assigned_user_ids),
                "disableAutoClose": schedule.disable_auto_close,
            },
        )

    def delete(self, schedule_id: str) -> bool:
        return self._store.delete(SHIFT_SCHEDULES, schedule_id)
