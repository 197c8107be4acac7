from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftSchedule


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[ShiftSchedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: str) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def save(self, schedule: ShiftSchedule) -> str:
        raise NotImplementedError

    def delete(self, schedule_id: str) -> bool:
        raise NotImplementedError
