from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import Geofence, Project
from .repository import ProjectRepository

_SELECT = """
    SELECT project_id, name, fence_lat, fence_lng, fence_radius, fence_enabled, assigned_user_ids
    FROM projects
"""


def _to_project(r: dict) -> Project:
    return Project(
        project_id=str(r["project_id"]),
        name=r["name"],
        geofence=Geofence(
            lat=float(r.get("fence_lat") or 0.0),
            lng=float(r.get("fence_lng") or 0.0),
            radius=float(r.get("fence_radius") or 0.0),
            enabled=bool(r.get("fence_enabled")),
        ),
        assigned_user_ids=tuple(load_json_list(r.get("assigned_user_ids"))),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY name")
            return [_to_project(r) for r in fetchall(cur)]

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE project_id=%s", (str(project_id),))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def save(self, project: Project) -> str:
        project_id = project.project_id or uuid.uuid4().hex
        fence = project.geofence
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(project_id, name, fence_lat, fence_lng, fence_radius, fence_enabled, assigned_user_ids)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), fence_lat=VALUES(fence_lat), fence_lng=VALUES(fence_lng),
                    fence_radius=VALUES(fence_radius), fence_enabled=VALUES(fence_enabled),
                    assigned_user_ids=VALUES(assigned_user_ids)
                """,
                (
                    project_id,
                    project.name,
                    fence.lat,
                    fence.lng,
                    fence.radius,
                    int(fence.enabled),
                    dump_json_list(project.assigned_user_ids),
                ),
            )
        return project_id

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (str(project_id),))
            return cur.rowcount > 0
