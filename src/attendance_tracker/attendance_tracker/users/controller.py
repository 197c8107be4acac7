from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.web import admin_required, current_session, json_body, login_required, ok
from ..core.enums import Role
from ..container import Container
from .model import User


def _user_dict(u: User) -> dict:
    return {
        "id": u.user_id,
        "name": u.name,
        "email": u.email,
        "employee_id": u.employee_id,
        "department": u.department,
        "role": u.role.value,
        "avatar": u.avatar,
        "company": u.company,
        "gross_salary": u.gross_salary,
        "standard_hours": u.standard_hours,
        "disable_overtime": u.disable_overtime,
        "disable_deductions": u.disable_deductions,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return ok(user={"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        s_user = current_session()
        user = container.user_service.get_user(s_user.user_id)
        if user is None:
            return ok(user={"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value})
        return ok(user=_user_dict(user))

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        return ok(users=[_user_dict(u) for u in container.user_service.list_users()])

    def _save(user_id=None):
        data = json_body()
        saved = container.user_service.save_user(
            current_session(),
            user_id=user_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            employee_id=data.get("employee_id", ""),
            department=data.get("department", ""),
            role=data.get("role") or Role.EMPLOYEE.value,
            password=data.get("password") or None,
            standard_hours=data.get("standard_hours"),
            gross_salary=data.get("gross_salary"),
            company=data.get("company"),
            disable_overtime=bool(data.get("disable_overtime")),
            disable_deductions=bool(data.get("disable_deductions")),
        )
        return saved

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        return ok(id=_save()), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def users_update(user_id: str):
        return ok(id=_save(user_id))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def users_delete(user_id: str):
        container.user_service.delete_user(current_session(), user_id)
        return ok()
