from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_session, json_body, login_required, ok
from ..container import Container
from .model import ShiftSchedule


def _schedule_dict(s: ShiftSchedule) -> dict:
    return {
        "id": s.schedule_id,
        "name": s.name,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "working_days": list(s.working_days),
        "assigned_user_ids": list(s.assigned_user_ids),
        "disable_auto_close": s.disable_auto_close,
        "crosses_midnight": s.crosses_midnight,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    @admin_required
    def shifts_list():
        return ok(shifts=[_schedule_dict(s) for s in svc.list_schedules()])

    @app.route("/api/me/shifts", methods=["GET"], endpoint="my_shifts")
    @login_required
    def my_shifts():
        return ok(shifts=[_schedule_dict(s) for s in svc.schedules_for_user(current_session().user_id)])

    def _save(schedule_id=None) -> str:
        data = json_body()
        return svc.save_schedule(
            current_session(),
            schedule_id=schedule_id,
            name=data.get("name", ""),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            working_days=data.get("working_days") or [],
            assigned_user_ids=data.get("assigned_user_ids") or [],
            disable_auto_close=bool(data.get("disable_auto_close")),
        )

    @app.route("/api/shifts", methods=["POST"], endpoint="shifts_create")
    @admin_required
    def shifts_create():
        return ok(id=_save()), 201

    @app.route("/api/shifts/<schedule_id>", methods=["PUT"], endpoint="shifts_update")
    @admin_required
    def shifts_update(schedule_id: str):
        return ok(id=_save(schedule_id))

    @app.route("/api/shifts/<schedule_id>", methods=["DELETE"], endpoint="shifts_delete")
    @admin_required
    def shifts_delete(schedule_id: str):
        svc.delete_schedule(current_session(), schedule_id)
        return ok()
