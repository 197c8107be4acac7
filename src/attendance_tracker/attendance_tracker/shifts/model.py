from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ShiftSchedule:
    """Domain entity: a weekly shift pattern assigned to staff.

    Times are ``HH:MM``; an end time earlier than the start time means the
    shift runs past midnight.
    """

    schedule_id: str
    name: str
    start_time: str
    end_time: str
    working_days: Tuple[str, ...] = ()
    assigned_user_ids: Tuple[str, ...] = ()
    disable_auto_close: bool = False

    @property
    def crosses_midnight(self) -> bool:
        return self.end_time < self.start_time
