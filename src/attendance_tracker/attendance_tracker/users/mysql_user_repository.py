from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, email, name, employee_id, department, role, password_hash, avatar,
    gross_salary, company, standard_hours, disable_overtime, disable_deductions
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row.get("name") or "",
        email=row.get("email") or "",
        employee_id=row.get("employee_id") or "",
        department=row.get("department") or "",
        role=Role(row.get("role") or Role.EMPLOYEE.value),
        password_hash=row.get("password_hash") or "",
        avatar=row.get("avatar"),
        gross_salary=float(row["gross_salary"]) if row.get("gross_salary") is not None else None,
        company=row.get("company"),
        standard_hours=float(row["standard_hours"]) if row.get("standard_hours") is not None else None,
        disable_overtime=bool(row.get("disable_overtime")),
        disable_deductions=bool(row.get("disable_deductions")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name")
            return [_to_user(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def save(self, user: User) -> str:
        user_id = user.user_id or uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users (
                    user_id, email, name, employee_id, department, role, password_hash, avatar,
                    gross_salary, company, standard_hours, disable_overtime, disable_deductions
                )
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    email=VALUES(email), name=VALUES(name), employee_id=VALUES(employee_id),
                    department=VALUES(department), role=VALUES(role), password_hash=VALUES(password_hash),
                    avatar=VALUES(avatar), gross_salary=VALUES(gross_salary), company=VALUES(company),
                    standard_hours=VALUES(standard_hours), disable_overtime=VALUES(disable_overtime),
                    disable_deductions=VALUES(disable_deductions)
                """,
                (
                    user_id,
                    user.email,
                    user.name,
                    user.employee_id,
                    user.department,
                    user.role.value,
                    user.password_hash,
                    user.avatar,
                    user.gross_salary,
                    user.company,
                    user.standard_hours,
                    int(user.disable_overtime),
                    int(user.disable_deductions),
                ),
            )
        return user_id

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (str(user_id),))
            return cur.rowcount > 0
