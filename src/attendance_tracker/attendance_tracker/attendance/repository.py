from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, GeoPoint


class AttendanceRepository(Protocol):
    """Read/write contract the attendance core needs from a store.

    Implementations must skip malformed records on read (see
    ``parsing.parse_records``) and raise ``StoreError`` for backend failures.
    Check-in and check-out timestamps are assigned by the store.
    """

    def fetch_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def fetch_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        """Records of one user, newest check-in first."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        user_id: str,
        user_name: str,
        *,
        location: Optional[GeoPoint] = None,
        project_id: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def update_checkout(
        self,
        record_id: str,
        *,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> bool:
        """Close an open record. Returns False when no open record has that id."""

        raise NotImplementedError

    def correct_record(self, record_id: str, *, check_in: datetime, check_out: Optional[datetime]) -> bool:
        """Admin-only overwrite of both timestamps. Returns False for unknown ids."""

        raise NotImplementedError
