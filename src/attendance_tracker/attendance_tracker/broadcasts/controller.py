from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_session, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.broadcast_service

    @app.route("/api/broadcasts", methods=["GET"], endpoint="broadcasts_visible")
    @login_required
    def broadcasts_visible():
        return ok(broadcasts=[b.to_dict() for b in svc.visible_to(current_session().user_id)])

    @app.route("/api/admin/broadcasts", methods=["GET"], endpoint="broadcasts_list")
    @admin_required
    def broadcasts_list():
        return ok(broadcasts=[b.to_dict() for b in svc.list_broadcasts(current_session())])

    def _save(broadcast_id=None) -> str:
        data = json_body()
        return svc.save_broadcast(
            current_session(),
            broadcast_id=broadcast_id,
            title=data.get("title", ""),
            message=data.get("message", ""),
            type=data.get("type") or "info",
            active=bool(data.get("active", True)),
            target_project_ids=data.get("target_project_ids") or [],
            target_user_ids=data.get("target_user_ids") or [],
        )

    @app.route("/api/admin/broadcasts", methods=["POST"], endpoint="broadcasts_create")
    @admin_required
    def broadcasts_create():
        return ok(id=_save()), 201

    @app.route("/api/admin/broadcasts/<broadcast_id>", methods=["PUT"], endpoint="broadcasts_update")
    @admin_required
    def broadcasts_update(broadcast_id: str):
        return ok(id=_save(broadcast_id))

    @app.route("/api/admin/broadcasts/<broadcast_id>/toggle", methods=["POST"], endpoint="broadcasts_toggle")
    @admin_required
    def broadcasts_toggle(broadcast_id: str):
        return ok(active=svc.toggle_active(current_session(), broadcast_id))

    @app.route("/api/admin/broadcasts/<broadcast_id>", methods=["DELETE"], endpoint="broadcasts_delete")
    @admin_required
    def broadcasts_delete(broadcast_id: str):
        svc.delete_broadcast(current_session(), broadcast_id)
        return ok()
