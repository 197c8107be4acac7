from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import coerce_timestamp, now_local
from ..core.enums import BroadcastType
from ..database.local_store import LocalDocumentStore
from .model import Broadcast
from .repository import BroadcastRepository

BROADCASTS = "broadcasts"


def _to_broadcast(doc: dict) -> Broadcast:
    return Broadcast(
        broadcast_id=str(doc["id"]),
        title=doc.get("title") or "",
        message=doc.get("message") or "",
        type=BroadcastType(doc.get("type") or BroadcastType.INFO.value),
        active=bool(doc.get("active")),
        created_at=coerce_timestamp(doc.get("createdAt")) or now_local(),
        target_project_ids=tuple(str(p) for p in doc.get("targetProjectIds") or ()),
        target_user_ids=tuple(str(u) for u in doc.get("targetUserIds") or ()),
        updated_at=coerce_timestamp(doc.get("updatedAt")),
    )


class LocalBroadcastRepository(BroadcastRepository):
    def __init__(self, store: LocalDocumentStore):
        self._store = store

    def list_all(self) -> Sequence[Broadcast]:
        items = [_to_broadcast(d) for d in self._store.list(BROADCASTS) if d.get("id")]
        return sorted(items, key=lambda b: b.created_at, reverse=True)

    def get_by_id(self, broadcast_id: str) -> Optional[Broadcast]:
        doc = self._store.get(BROADCASTS, broadcast_id)
        return _to_broadcast(doc) if doc else None

    def save(self, broadcast: Broadcast) -> str:
        return self._store.upsert(
            BROADCASTS,
            {
                "id": broadcast.broadcast_id,
                "title": broadcast.title,
                "message": broadcast.message,
                "type": broadcast.type.value,
                "active": broadcast.active,
                "targetProjectIds": list(broadcast.target_project_ids),
                "targetUserIds": list(broadcast.target_user_ids),
                "createdAt": broadcast.created_at.isoformat(),
                "updatedAt": broadcast.updated_at.isoformat() if broadcast.updated_at else None,
            },
        )

    def delete(self, broadcast_id: str) -> bool:
        return self._store.delete(BROADCASTS, broadcast_id)
