from __future__ import annotations

from typing import Optional, Sequence

from ..database.local_store import LocalDocumentStore
from .model import Geofence, Project
from .repository import ProjectRepository

PROJECTS = "projects"


def _to_project(doc: dict) -> Project:
    fence = doc.get("geofence") or {}
    return Project(
        project_id=str(doc["id"]),
        name=doc.get("name") or "",
        geofence=Geofence(
            lat=float(fence.get("lat") or 0.0),
            lng=float(fence.get("lng") or 0.0),
            radius=float(fence.get("radius") or 0.0),
            enabled=bool(fence.get("enabled")),
        ),
        assigned_user_ids=tuple(str(u) for u in doc.get("assignedUserIds") or []),
    )


class LocalProjectRepository(ProjectRepository):
    def __init__(self, store: LocalDocumentStore):
        self._store = store

    def list_all(self) -> Sequence[Project]:
        return sorted((_to_project(d) for d in self._store.list(PROJECTS) if d.get("id")), key=lambda p: p.name)

    def get_by_id(self, project_id: str) -> Optional[Project]:
        doc = self._store.get(PROJECTS, project_id)
        return _to_project(doc) if doc else None

    def save(self, project: Project) -> str:
        fence = project.geofence
        return self._store.upsert(
            PROJECTS,
            {
                "id": project.project_id,
                "name": project.name,
                "geofence": {"lat": fence.lat, "lng": fence.lng, "radius": fence.radius, "enabled": fence.enabled},
                "assignedUserIds": list(project.assigned_user_ids),
            },
        )

    def delete(self, project_id: str) -> bool:
        return self._store.delete(PROJECTS, project_id)
