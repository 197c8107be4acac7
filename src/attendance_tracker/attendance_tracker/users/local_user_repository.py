from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.local_store import LocalDocumentStore
from .model import User
from .repository import UserRepository

USERS = "users"


def _to_user(doc: dict) -> User:
    def _num(key: str) -> Optional[float]:
        value = doc.get(key)
        return float(value) if value not in (None, "") else None

    return User(
        user_id=str(doc["id"]),
        name=doc.get("name") or "",
        email=doc.get("email") or "",
        employee_id=doc.get("employeeId") or "",
        department=doc.get("department") or "",
        role=Role(doc.get("role") or Role.EMPLOYEE.value),
        password_hash=doc.get("passwordHash") or "",
        avatar=doc.get("avatar"),
        gross_salary=_num("grossSalary"),
        company=doc.get("company"),
        standard_hours=_num("standardHours"),
        disable_overtime=bool(doc.get("disableOvertime")),
        disable_deductions=bool(doc.get("disableDeductions")),
    )


def _to_doc(user: User) -> dict:
    data = asdict(user)
    return {
        "id": data["user_id"],
        "name": data["name"],
        "email": data["email"],
        "employeeId": data["employee_id"],
        "department": data["department"],
        "role": user.role.value,
        "passwordHash": data["password_hash"],
        "avatar": data["avatar"],
        "grossSalary": data["gross_salary"],
        "company": data["company"],
        "standardHours": data["standard_hours"],
        "disableOvertime": data["disable_overtime"],
        "disableDeductions": data["disable_deductions"],
    }


class LocalUserRepository(UserRepository):
    def __init__(self, store: LocalDocumentStore):
        self._store = store

    def list_all(self) -> Sequence[User]:
        users = [_to_user(d) for d in self._store.list(USERS) if d.get("id")]
        return sorted(users, key=lambda u: u.name)

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._store.get(USERS, str(user_id))
        return _to_user(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        for doc in self._store.list(USERS):
            if (doc.get("email") or "").lower() == email.lower():
                return _to_user(doc)
        return None

    def save(self, user: User) -> str:
        return self._store.upsert(USERS, _to_doc(user))

    def delete_by_id(self, user_id: str) -> bool:
        return self._store.delete(USERS, str(user_id))
