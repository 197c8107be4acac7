from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: staff member.

    Note: Plain data object (no DB access). Owned by user management; the
    attendance core only reads it.
    """

    user_id: str
    name: str
    email: str = ""
    employee_id: str = ""
    department: str = ""
    role: Role = Role.EMPLOYEE
    password_hash: str = ""
    avatar: Optional[str] = None
    gross_salary: Optional[float] = None
    company: Optional[str] = None
    standard_hours: Optional[float] = None
    disable_overtime: bool = False
    disable_deductions: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class SessionUser:
    """Identity of the caller, passed explicitly to operations that need it.

    Controllers build it from the Flask session; services never look up a
    "current user" on their own.
    """

    user_id: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
