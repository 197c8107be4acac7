from __future__ import annotations

from typing import Optional

from flask import Flask

from ..common.datetime_utils import coerce_timestamp
from ..common.web import admin_required, current_session, json_body, login_required, ok
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord
from .parsing import parse_geopoint


def _record_dict(record: Optional[AttendanceRecord]) -> Optional[dict]:
    if record is None:
        return None
    return {
        "id": record.record_id,
        "user_id": record.user_id,
        "user_name": record.user_name,
        "check_in": record.check_in.isoformat(timespec="seconds"),
        "check_out": record.check_out.isoformat(timespec="seconds") if record.check_out else None,
        "project_id": record.project_id,
        "needs_review": record.needs_review,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        data = json_body()
        record_id = svc.check_in(current_session(), location=parse_geopoint(data.get("location")))
        return ok(id=record_id, message="Clocked in"), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        data = json_body()
        record_id = svc.check_out(current_session(), location=parse_geopoint(data.get("location")))
        return ok(id=record_id, message="Clocked out")

    @app.route("/api/attendance/current", methods=["GET"], endpoint="attendance_current")
    @login_required
    def attendance_current():
        return ok(record=_record_dict(svc.current_record(current_session().user_id)))

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        return ok(**svc.history(current_session().user_id))

    @app.route("/api/users/<user_id>/history", methods=["GET"], endpoint="user_history")
    @admin_required
    def user_history(user_id: str):
        return ok(**svc.history(user_id))

    @app.route("/api/attendance/active", methods=["GET"], endpoint="attendance_active")
    @admin_required
    def attendance_active():
        return ok(active=svc.active_shifts_ui())

    @app.route("/api/attendance/<record_id>", methods=["PUT"], endpoint="attendance_correct")
    @admin_required
    def attendance_correct(record_id: str):
        data = json_body()
        check_in = coerce_timestamp(data.get("check_in"))
        if check_in is None:
            raise ValidationError("check_in must be an ISO-8601 timestamp")
        check_out = None
        if data.get("check_out"):
            check_out = coerce_timestamp(data.get("check_out"))
            if check_out is None:
                raise ValidationError("check_out must be an ISO-8601 timestamp")

        svc.correct_record(current_session(), record_id, check_in=check_in, check_out=check_out)
        return ok()
