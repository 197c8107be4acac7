import pytest

from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import AuthorizationError, ValidationError
from src.attendance_tracker.attendance_tracker.database.local_store import LocalDocumentStore
from src.attendance_tracker.attendance_tracker.projects.local_project_repository import LocalProjectRepository
from src.attendance_tracker.attendance_tracker.projects.service import ProjectService
from src.attendance_tracker.attendance_tracker.users.model import SessionUser

ADMIN = SessionUser(user_id="a1", name="Boss", role=Role.ADMIN)
STAFF = SessionUser(user_id="u1", name="Ann", role=Role.EMPLOYEE)


@pytest.fixture
def svc(tmp_path):
    return ProjectService(LocalProjectRepository(LocalDocumentStore(tmp_path / "store.json")))


def test_save_and_assign_project(svc):
    project_id = svc.save_project(
        ADMIN, name="Depot", lat="51.5", lng="-0.12", radius=200, enabled=True, assigned_user_ids=["u1", "u1", "u2"]
    )

    project = svc.get_project(project_id)
    assert project.geofence.enabled
    assert project.geofence.radius == 200.0
    assert project.assigned_user_ids == ("u1", "u2")
    assert svc.primary_project_for("u1").project_id == project_id
    assert svc.projects_for_user("u9") == []


def test_update_existing_project(svc):
    project_id = svc.save_project(ADMIN, name="Depot")
    assert svc.save_project(ADMIN, name="Depot North", project_id=project_id) == project_id
    assert [p.name for p in svc.list_projects()] == ["Depot North"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "X", "enabled": True, "lat": 95, "lng": 0},
        {"name": "X", "enabled": True, "lat": 10, "lng": 0, "radius": 0},
        {"name": "X", "project_id": "missing"},
    ],
)
def test_invalid_project_is_rejected(svc, kwargs):
    with pytest.raises(ValidationError):
        svc.save_project(ADMIN, **kwargs)


def test_only_admin_manages_projects(svc):
    with pytest.raises(AuthorizationError):
        svc.save_project(STAFF, name="Depot")


def test_delete_project(svc):
    project_id = svc.save_project(ADMIN, name="Depot")
    svc.delete_project(ADMIN, project_id)
    assert svc.list_projects() == []
    with pytest.raises(ValidationError):
        svc.delete_project(ADMIN, project_id)
