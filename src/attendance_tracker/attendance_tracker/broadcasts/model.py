from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ..core.enums import BroadcastType


@dataclass(frozen=True)
class Broadcast:
    """Domain entity: notice shown on staff dashboards."""

    broadcast_id: str
    title: str
    message: str
    type: BroadcastType
    active: bool
    created_at: datetime
    target_project_ids: Tuple[str, ...] = ()
    target_user_ids: Tuple[str, ...] = ()
    updated_at: Optional[datetime] = None

    @property
    def is_global(self) -> bool:
        return not self.target_project_ids and not self.target_user_ids

    def is_visible_to(self, user_id: str, project_ids: Iterable[str]) -> bool:
        if not self.active:
            return False
        if self.is_global:
            return True
        if user_id in self.target_user_ids:
            return True
        return any(p in self.target_project_ids for p in project_ids)

    def to_dict(self) -> dict:
        return {
            "id": self.broadcast_id,
            "title": self.title,
            "message": self.message,
            "type": self.type.value,
            "active": self.active,
            "target_project_ids": list(self.target_project_ids),
            "target_user_ids": list(self.target_user_ids),
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "updated_at": self.updated_at.isoformat(timespec="seconds") if self.updated_at else None,
        }
