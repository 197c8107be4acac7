from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import (
    NoActiveSessionError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)
from ..projects import geofence
from ..projects.service import ProjectService
from ..users.model import SessionUser, User
from ..users.repository import UserRepository
from ..users.service import require_admin
from .model import ActiveShift, AttendanceRecord, GeoPoint
from .repository import AttendanceRepository
from .resolver import (
    active_record_for,
    elapsed_label,
    history_rows,
    resolve_active,
    total_tracked_hours,
)

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        projects: Optional[ProjectService] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._projects = projects

    # -- reads -------------------------------------------------------------

    def _records_for(self, user_id: str) -> Sequence[AttendanceRecord]:
        try:
            return self._attendance.fetch_for_user(user_id)
        except StoreError as e:
            logger.warning("Attendance fetch for user %s failed: %s", user_id, e)
            return []

    def _all_records(self) -> Sequence[AttendanceRecord]:
        try:
            return self._attendance.fetch_all()
        except StoreError as e:
            logger.warning("Attendance fetch failed: %s", e)
            return []

    def _all_users(self) -> Sequence[User]:
        try:
            return self._users.list_all()
        except StoreError as e:
            logger.warning("User fetch failed: %s", e)
            return []

    def current_record(self, user_id: str) -> Optional[AttendanceRecord]:
        """The caller's active shift, if any (latest open record)."""

        return active_record_for(self._records_for(user_id), user_id)

    def history(self, user_id: str, *, now: Optional[datetime] = None, limit: int = DEFAULT_HISTORY_LIMIT) -> dict:
        """Newest rows first (at most ``limit``); the total covers every record."""

        now = now or now_local()
        records = self._records_for(user_id)
        return {
            "rows": history_rows(records[:limit], now),
            "total_hours": round(total_tracked_hours(records), 2),
        }

    def active_shifts(self, *, now: Optional[datetime] = None) -> list[ActiveShift]:
        now = now or now_local()
        return resolve_active(self._all_records(), self._all_users(), now=now)

    def active_shifts_ui(self, *, now: Optional[datetime] = None) -> list[dict]:
        now = now or now_local()
        return [
            {
                "user_id": s.user.user_id,
                "name": s.user.name,
                "department": s.user.department,
                "record_id": s.record.record_id,
                "check_in": s.record.check_in.isoformat(timespec="seconds"),
                "elapsed": elapsed_label(s.record, now),
                "stale": s.is_stale,
            }
            for s in self.active_shifts(now=now)
        ]

    # -- writes ------------------------------------------------------------

    def check_in(self, session: SessionUser, *, location: Optional[GeoPoint] = None) -> str:
        project = self._projects.primary_project_for(session.user_id) if self._projects else None

        if project and not geofence.contains(project.geofence, location):
            raise ValidationError("You must be at the worksite to clock in")

        # A second open record is allowed; the resolver keeps the latest one active.
        record_id = self._attendance.create_checkin(
            session.user_id,
            session.name,
            location=location,
            project_id=project.project_id if project else None,
        )
        logger.info("User %s clocked in (record %s)", session.user_id, record_id)
        return record_id

    def check_out(self, session: SessionUser, *, location: Optional[GeoPoint] = None) -> str:
        record = self.current_record(session.user_id)
        if record is None:
            raise NoActiveSessionError("No active session to clock out from")

        fence = None
        if self._projects and record.project_id:
            project = self._projects.get_project(record.project_id)
            fence = project.geofence if project else None
        outside = not geofence.contains(fence, location)

        if not self._attendance.update_checkout(record.record_id, location=location, needs_review=outside):
            # closed concurrently from another device
            raise NoActiveSessionError("No active session to clock out from")

        if outside:
            logger.info("User %s clocked out outside the worksite (record %s)", session.user_id, record.record_id)
        else:
            logger.info("User %s clocked out (record %s)", session.user_id, record.record_id)
        return record.record_id

    def correct_record(
        self,
        session: SessionUser,
        record_id: str,
        *,
        check_in: datetime,
        check_out: Optional[datetime] = None,
    ) -> None:
        require_admin(session)

        if check_out is not None and check_out < check_in:
            raise ValidationError("Check-out cannot be before check-in")

        if not self._attendance.correct_record(record_id, check_in=check_in, check_out=check_out):
            raise RecordNotFoundError(f"Attendance record {record_id} not found")
        logger.info("Record %s corrected by %s", record_id, session.user_id)
