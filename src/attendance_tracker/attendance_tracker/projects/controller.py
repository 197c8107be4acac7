from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_session, json_body, login_required, ok
from ..container import Container
from .model import Project


def _project_dict(p: Project) -> dict:
    return {
        "id": p.project_id,
        "name": p.name,
        "geofence": {
            "lat": p.geofence.lat,
            "lng": p.geofence.lng,
            "radius": p.geofence.radius,
            "enabled": p.geofence.enabled,
        },
        "assigned_user_ids": list(p.assigned_user_ids),
    }


def register(app: Flask, container: Container) -> None:
    svc = container.project_service

    @app.route("/api/projects", methods=["GET"], endpoint="projects_list")
    @admin_required
    def projects_list():
        return ok(projects=[_project_dict(p) for p in svc.list_projects()])

    @app.route("/api/me/projects", methods=["GET"], endpoint="my_projects")
    @login_required
    def my_projects():
        return ok(projects=[_project_dict(p) for p in svc.projects_for_user(current_session().user_id)])

    def _save(project_id=None) -> str:
        data = json_body()
        fence = data.get("geofence") or {}
        return svc.save_project(
            current_session(),
            project_id=project_id,
            name=data.get("name", ""),
            lat=fence.get("lat"),
            lng=fence.get("lng"),
            radius=fence.get("radius"),
            enabled=bool(fence.get("enabled")),
            assigned_user_ids=data.get("assigned_user_ids") or [],
        )

    @app.route("/api/projects", methods=["POST"], endpoint="projects_create")
    @admin_required
    def projects_create():
        return ok(id=_save()), 201

    @app.route("/api/projects/<project_id>", methods=["PUT"], endpoint="projects_update")
    @admin_required
    def projects_update(project_id: str):
        return ok(id=_save(project_id))

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="projects_delete")
    @admin_required
    def projects_delete(project_id: str):
        svc.delete_project(current_session(), project_id)
        return ok()
