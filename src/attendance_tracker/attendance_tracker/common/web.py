"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NoActiveSessionError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)
from ..users.model import SessionUser

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (RecordNotFoundError, 404),
    (NoActiveSessionError, 409),
    (StoreError, 503),
)


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def ok(**payload):
    return jsonify({"success": True, **payload})


def current_session() -> SessionUser:
    return SessionUser(
        user_id=str(session["user_id"]),
        name=session.get("name") or "",
        role=Role(session.get("role") or Role.EMPLOYEE.value),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Please sign in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status in _STATUS:
            if isinstance(e, exc_type):
                if status >= 500:
                    logger.error("Store failure on %s %s: %s", request.method, request.path, e)
                    return error("The data store is unavailable, please retry", status)
                return error(str(e), status)
        logger.exception("Unhandled domain error on %s %s", request.method, request.path)
        return error("Internal error", 500)
