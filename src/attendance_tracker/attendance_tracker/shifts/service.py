from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_hhmm, require_non_empty, require_weekdays
from ..core.exceptions import ValidationError
from ..users.model import SessionUser
from ..users.service import require_admin
from .model import ShiftSchedule
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_schedules(self) -> Sequence[ShiftSchedule]:
        return self._shifts.list_all()

    def schedules_for_user(self, user_id: str) -> list[ShiftSchedule]:
        return [s for s in self._shifts.list_all() if user_id in s.assigned_user_ids]

    def save_schedule(
        self,
        session: SessionUser,
        *,
        name: str,
        start_time: str,
        end_time: str,
        working_days: Sequence[str] = (),
        assigned_user_ids: Sequence[str] = (),
        disable_auto_close: bool = False,
        schedule_id: Optional[str] = None,
    ) -> str:
        require_admin(session)

        name = require_non_empty(name, "Shift name")
        start_time = require_hhmm(start_time, "Start time")
        end_time = require_hhmm(end_time, "End time")
        if start_time == end_time:
            raise ValidationError("Start and end time must differ")

        if schedule_id and not self._shifts.get_by_id(schedule_id):
            raise ValidationError("Shift schedule does not exist")

        saved = self._shifts.save(
            ShiftSchedule(
                schedule_id=schedule_id or "",
                name=name,
                start_time=start_time,
                end_time=end_time,
                working_days=tuple(require_weekdays(working_days)),
                assigned_user_ids=tuple(dict.fromkeys(str(u) for u in assigned_user_ids or () if u)),
                disable_auto_close=bool(disable_auto_close),
            )
        )
        logger.info("Shift schedule %s saved by %s", saved, session.user_id)
        return saved

    def delete_schedule(self, session: SessionUser, schedule_id: str) -> None:
        require_admin(session)
        if not self._shifts.delete(schedule_id):
            raise ValidationError("Failed to delete shift schedule")
