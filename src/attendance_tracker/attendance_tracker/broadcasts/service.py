from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import BroadcastType
from ..core.exceptions import ValidationError
from ..projects.service import ProjectService
from ..users.model import SessionUser
from ..users.service import require_admin
from .model import Broadcast
from .repository import BroadcastRepository

logger = logging.getLogger(__name__)


class BroadcastService:
    """Use case: notice board. Admins publish, staff read what targets them."""

    def __init__(self, broadcasts: BroadcastRepository, projects: ProjectService):
        self._broadcasts = broadcasts
        self._projects = projects

    def list_broadcasts(self, session: SessionUser) -> Sequence[Broadcast]:
        require_admin(session)
        return self._broadcasts.list_all()

    def visible_to(self, user_id: str) -> list[Broadcast]:
        project_ids = [p.project_id for p in self._projects.projects_for_user(user_id)]
        return [b for b in self._broadcasts.list_all() if b.is_visible_to(user_id, project_ids)]

    def save_broadcast(
        self,
        session: SessionUser,
        *,
        title: str,
        message: str,
        type: str = BroadcastType.INFO.value,
        active: bool = True,
        target_project_ids: Sequence[str] = (),
        target_user_ids: Sequence[str] = (),
        broadcast_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_admin(session)
        now = now or now_local()

        title = require_non_empty(title, "Headline")
        message = require_non_empty(message, "Message")
        try:
            kind = BroadcastType(type)
        except ValueError:
            raise ValidationError(f"Unknown broadcast type: {type}") from None

        existing = self._broadcasts.get_by_id(broadcast_id) if broadcast_id else None
        if broadcast_id and not existing:
            raise ValidationError("Broadcast does not exist")

        broadcast = Broadcast(
            broadcast_id=broadcast_id or "",
            title=title,
            message=message,
            type=kind,
            active=bool(active),
            created_at=existing.created_at if existing else now,
            target_project_ids=tuple(dict.fromkeys(str(p) for p in target_project_ids or () if p)),
            target_user_ids=tuple(dict.fromkeys(str(u) for u in target_user_ids or () if u)),
            updated_at=now if existing else None,
        )
        saved = self._broadcasts.save(broadcast)
        logger.info("Broadcast %s saved by %s", saved, session.user_id)
        return saved

    def toggle_active(self, session: SessionUser, broadcast_id: str, *, now: Optional[datetime] = None) -> bool:
        require_admin(session)
        existing = self._broadcasts.get_by_id(broadcast_id)
        if not existing:
            raise ValidationError("Broadcast does not exist")
        updated = replace(existing, active=not existing.active, updated_at=now or now_local())
        self._broadcasts.save(updated)
        return updated.active

    def delete_broadcast(self, session: SessionUser, broadcast_id: str) -> None:
        require_admin(session)
        if not self._broadcasts.delete(broadcast_id):
            raise ValidationError("Failed to delete broadcast")
