from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_float, require_float_range, require_non_empty
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M
from ..core.exceptions import ValidationError
from ..users.model import SessionUser
from ..users.service import require_admin
from .model import Geofence, Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """Use case: manage worksites and their geofences (admin)."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def list_projects(self) -> Sequence[Project]:
        return self._projects.list_all()

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._projects.get_by_id(project_id)

    def projects_for_user(self, user_id: str) -> list[Project]:
        return [p for p in self._projects.list_all() if user_id in p.assigned_user_ids]

    def primary_project_for(self, user_id: str) -> Optional[Project]:
        """The worksite a user clocks in at: the first one they are assigned to."""

        projects = self.projects_for_user(user_id)
        return projects[0] if projects else None

    def save_project(
        self,
        session: SessionUser,
        *,
        name: str,
        project_id: Optional[str] = None,
        lat=None,
        lng=None,
        radius=DEFAULT_GEOFENCE_RADIUS_M,
        enabled: bool = False,
        assigned_user_ids: Sequence[str] = (),
    ) -> str:
        require_admin(session)
        name = require_non_empty(name, "Project name")

        if enabled:
            fence = Geofence(
                lat=require_float_range(lat, "Latitude", -90.0, 90.0),
                lng=require_float_range(lng, "Longitude", -180.0, 180.0),
                radius=require_float_range(radius, "Radius", 1.0, 100_000.0),
                enabled=True,
            )
        else:
            fence = Geofence(
                lat=optional_float(lat, "Latitude") or 0.0,
                lng=optional_float(lng, "Longitude") or 0.0,
                radius=optional_float(radius, "Radius") or DEFAULT_GEOFENCE_RADIUS_M,
                enabled=False,
            )

        if project_id and not self._projects.get_by_id(project_id):
            raise ValidationError("Project does not exist")

        assigned = tuple(dict.fromkeys(str(u) for u in assigned_user_ids or () if u))
        saved = self._projects.save(
            Project(project_id=project_id or "", name=name, geofence=fence, assigned_user_ids=assigned)
        )
        logger.info("Project %s saved by %s", saved, session.user_id)
        return saved

    def delete_project(self, session: SessionUser, project_id: str) -> None:
        require_admin(session)
        if not self._projects.delete(project_id):
            raise ValidationError("Failed to delete project")
