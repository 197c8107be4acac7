from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_float, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def require_admin(session: SessionUser) -> None:
    if not session.is_admin:
        raise AuthorizationError("Admin access required")


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip()
        user = self._users.get_by_email(email) if email else None
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: manage staff profiles (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def save_user(
        self,
        session: SessionUser,
        *,
        name: str,
        email: str,
        employee_id: str,
        department: str = "",
        role: Role | str = Role.EMPLOYEE,
        user_id: Optional[str] = None,
        password: Optional[str] = None,
        standard_hours=None,
        gross_salary=None,
        company: Optional[str] = None,
        disable_overtime: bool = False,
        disable_deductions: bool = False,
    ) -> str:
        require_admin(session)

        name = require_non_empty(name, "Full name")
        email = require_non_empty(email, "Email").lower()
        employee_id = require_non_empty(employee_id, "Staff ID")
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}") from None

        other = self._users.get_by_email(email)
        if other and other.user_id != (user_id or ""):
            raise ValidationError("Email is already registered")

        existing = self._users.get_by_id(user_id) if user_id else None
        if user_id and not existing:
            raise ValidationError("User does not exist")

        if password:
            require_min_length(password, "Password", 6)
            password_hash = generate_password_hash(password)
        elif existing:
            password_hash = existing.password_hash
        else:
            raise ValidationError("Password is required for new accounts")

        hours = optional_float(standard_hours, "Standard hours")
        if hours is not None and hours < 0:
            raise ValidationError("Standard hours cannot be negative")

        base = existing or User(user_id="", name=name)
        user = replace(
            base,
            name=name,
            email=email,
            employee_id=employee_id,
            department=(department or "").strip(),
            role=role,
            password_hash=password_hash,
            standard_hours=hours,
            gross_salary=optional_float(gross_salary, "Gross salary"),
            company=(company or "").strip() or None,
            disable_overtime=bool(disable_overtime),
            disable_deductions=bool(disable_deductions),
        )
        saved_id = self._users.save(user)
        logger.info("User %s saved by %s", saved_id, session.user_id)
        return saved_id

    def delete_user(self, session: SessionUser, user_id: str) -> None:
        require_admin(session)

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")
