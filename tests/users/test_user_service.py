import pytest
from werkzeug.security import generate_password_hash

from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.attendance_tracker.attendance_tracker.database.bootstrap import ensure_demo_users
from src.attendance_tracker.attendance_tracker.database.local_store import LocalDocumentStore
from src.attendance_tracker.attendance_tracker.users.local_user_repository import LocalUserRepository
from src.attendance_tracker.attendance_tracker.users.model import SessionUser, User
from src.attendance_tracker.attendance_tracker.users.service import AuthService, UserService

ADMIN = SessionUser(user_id="admin", name="Admin Demo", role=Role.ADMIN)
STAFF = SessionUser(user_id="staff", name="Staff Demo", role=Role.EMPLOYEE)


@pytest.fixture
def repo(tmp_path):
    users = LocalUserRepository(LocalDocumentStore(tmp_path / "store.json"))
    ensure_demo_users(users)
    return users


def test_demo_users_can_log_in(repo):
    auth = AuthService(repo)

    session = auth.authenticate("admin@example.com", "admin123")

    assert session.user_id == "admin"
    assert session.is_admin
    assert auth.authenticate("STAFF@example.com", "staff123").role == Role.EMPLOYEE


def test_ensure_demo_users_is_idempotent(repo):
    ensure_demo_users(repo)
    assert len(repo.list_all()) == 2


@pytest.mark.parametrize("email, password", [("admin@example.com", "wrong"), ("nobody@example.com", "x"), ("", "")])
def test_bad_credentials_are_rejected(repo, email, password):
    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate(email, password)


def test_placeholder_hash_never_authenticates(repo):
    repo.save(User(user_id="u9", name="Legacy", email="legacy@example.com", password_hash="CHANGE_ME"))
    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("legacy@example.com", "CHANGE_ME")


def test_create_and_update_user_keeps_password(repo):
    svc = UserService(repo)
    user_id = svc.save_user(
        ADMIN,
        name="Cara",
        email="Cara@Example.com",
        employee_id="EMP-100",
        role="employee",
        password="secret1",
        standard_hours="120",
    )

    svc.save_user(ADMIN, user_id=user_id, name="Cara B", email="cara@example.com", employee_id="EMP-100")

    user = svc.get_user(user_id)
    assert user.name == "Cara B"
    assert user.email == "cara@example.com"
    assert AuthService(repo).authenticate("cara@example.com", "secret1").user_id == user_id


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "X", "email": "admin@example.com", "employee_id": "E1", "password": "secret1"},
        {"name": "X", "email": "x@example.com", "employee_id": "E1"},
        {"name": "X", "email": "x@example.com", "employee_id": "E1", "password": "123"},
        {"name": "X", "email": "x@example.com", "employee_id": "E1", "password": "secret1", "role": "owner"},
        {"name": "X", "email": "x@example.com", "employee_id": "E1", "password": "secret1", "standard_hours": -1},
    ],
)
def test_invalid_user_is_rejected(repo, kwargs):
    with pytest.raises(ValidationError):
        UserService(repo).save_user(ADMIN, **kwargs)


def test_only_admin_manages_users(repo):
    with pytest.raises(AuthorizationError):
        UserService(repo).save_user(STAFF, name="X", email="x@example.com", employee_id="E1", password="secret1")


def test_admins_cannot_be_deleted(repo):
    svc = UserService(repo)
    with pytest.raises(ValidationError):
        svc.delete_user(ADMIN, "admin")
    svc.delete_user(ADMIN, "staff")
    assert [u.user_id for u in svc.list_users()] == ["admin"]
