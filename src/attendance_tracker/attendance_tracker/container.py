from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .attendance.local_attendance_repository import LocalAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .broadcasts.local_broadcast_repository import LocalBroadcastRepository
from .broadcasts.mysql_broadcast_repository import MySQLBroadcastRepository
from .broadcasts.repository import BroadcastRepository
from .broadcasts.service import BroadcastService
from .core.enums import StoreBackend
from .database.connection import DBConfig, DatabaseConnection
from .database.local_store import LocalDocumentStore
from .payroll.service import PayrollReportService
from .projects.local_project_repository import LocalProjectRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .shifts.local_shift_repository import LocalShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .users.local_user_repository import LocalUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    backend: StoreBackend

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    projects_repo: ProjectRepository
    shifts_repo: ShiftRepository
    broadcasts_repo: BroadcastRepository

    auth_service: AuthService
    user_service: UserService
    project_service: ProjectService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService
    shift_service: ShiftService
    broadcast_service: BroadcastService


def build_container(
    *,
    backend: str | StoreBackend = StoreBackend.MYSQL,
    db_config: Optional[dict] = None,
    local_store_path: Optional[str | Path] = None,
) -> Container:
    backend = StoreBackend(backend)

    if backend == StoreBackend.LOCAL:
        if not local_store_path:
            raise ValueError("local_store_path is required for the local backend")
        store = LocalDocumentStore(local_store_path)
        users_repo = LocalUserRepository(store)
        attendance_repo = LocalAttendanceRepository(store)
        projects_repo = LocalProjectRepository(store)
        shifts_repo = LocalShiftRepository(store)
        broadcasts_repo = LocalBroadcastRepository(store)
        logger.info("Using local document store at %s", store.path)
    else:
        if db_config is None:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        users_repo = MySQLUserRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        projects_repo = MySQLProjectRepository(conn)
        shifts_repo = MySQLShiftRepository(conn)
        broadcasts_repo = MySQLBroadcastRepository(conn)
        logger.info("Using MySQL store %s@%s/%s", conn.config.user, conn.config.host, conn.config.database)

    project_service = ProjectService(projects_repo)

    return Container(
        backend=backend,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        projects_repo=projects_repo,
        shifts_repo=shifts_repo,
        broadcasts_repo=broadcasts_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        project_service=project_service,
        attendance_service=AttendanceService(attendance_repo, users_repo, project_service),
        payroll_report_service=PayrollReportService(attendance_repo, users_repo),
        shift_service=ShiftService(shifts_repo),
        broadcast_service=BroadcastService(broadcasts_repo, project_service),
    )
