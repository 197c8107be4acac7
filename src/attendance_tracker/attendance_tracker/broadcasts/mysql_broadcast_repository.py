from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import BroadcastType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import Broadcast
from .repository import BroadcastRepository

_SELECT = """
    SELECT broadcast_id, title, message, type, active, target_project_ids, target_user_ids, created_at, updated_at
    FROM broadcasts
"""


def _to_broadcast(r: dict) -> Broadcast:
    return Broadcast(
        broadcast_id=str(r["broadcast_id"]),
        title=r["title"],
        message=r["message"],
        type=BroadcastType(r.get("type") or BroadcastType.INFO.value),
        active=bool(r.get("active")),
        created_at=r["created_at"],
        target_project_ids=tuple(load_json_list(r.get("target_project_ids"))),
        target_user_ids=tuple(load_json_list(r.get("target_user_ids"))),
        updated_at=r.get("updated_at"),
    )


class MySQLBroadcastRepository(BroadcastRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Broadcast]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_at DESC")
            return [_to_broadcast(r) for r in fetchall(cur)]

    def get_by_id(self, broadcast_id: str) -> Optional[Broadcast]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE broadcast_id=%s", (str(broadcast_id),))
            r = fetchone(cur)
            return _to_broadcast(r) if r else None

    def save(self, broadcast: Broadcast) -> str:
        broadcast_id = broadcast.broadcast_id or uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO broadcasts(
                    broadcast_id, title, message, type, active, target_project_ids, target_user_ids,
                    created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    title=VALUES(title), message=VALUES(message), type=VALUES(type), active=VALUES(active),
                    target_project_ids=VALUES(target_project_ids), target_user_ids=VALUES(target_user_ids),
                    updated_at=VALUES(updated_at)
                """,
                (
                    broadcast_id,
                    broadcast.title,
                    broadcast.message,
                    broadcast.type.value,
                    int(broadcast.active),
                    dump_json_list(broadcast.target_project_ids),
                    dump_json_list(broadcast.target_user_ids),
                    broadcast.created_at,
                    broadcast.updated_at,
                ),
            )
        return broadcast_id

    def delete(self, broadcast_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM broadcasts WHERE broadcast_id=%s", (str(broadcast_id),))
            return cur.rowcount > 0
