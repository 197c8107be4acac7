from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import coerce_timestamp, minutes_between, now_local
from ..database.local_store import LocalDocumentStore
from .model import AttendanceRecord, GeoPoint
from .parsing import parse_records, to_document
from .repository import AttendanceRepository

ATTENDANCE = "attendance"


class LocalAttendanceRepository(AttendanceRepository):
    """Attendance records kept in the local JSON document store (demo mode).

    ``clock`` stands in for the server clock that assigns timestamps.
    """

    def __init__(self, store: LocalDocumentStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def _sorted(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        return sorted(records, key=lambda r: r.check_in, reverse=True)

    def fetch_all(self) -> Sequence[AttendanceRecord]:
        return self._sorted(parse_records(self._store.list(ATTENDANCE)))

    def fetch_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        docs = [d for d in self._store.list(ATTENDANCE) if str(d.get("userId")) == str(user_id)]
        return self._sorted(parse_records(docs))

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        doc = self._store.get(ATTENDANCE, record_id)
        if not doc:
            return None
        parsed = parse_records([doc])
        return parsed[0] if parsed else None

    def create_checkin(
        self,
        user_id: str,
        user_name: str,
        *,
        location: Optional[GeoPoint] = None,
        project_id: Optional[str] = None,
    ) -> str:
        record = AttendanceRecord(
            record_id=uuid.uuid4().hex,
            user_id=str(user_id),
            user_name=user_name,
            check_in=self._clock(),
            project_id=project_id,
            location=location,
        )
        return self._store.insert(ATTENDANCE, to_document(record))

    def update_checkout(
        self,
        record_id: str,
        *,
        location: Optional[GeoPoint] = None,
        needs_review: bool = False,
    ) -> bool:
        closed = False

        def _close(doc: dict) -> None:
            nonlocal closed
            if doc.get("checkOut") is not None:
                return
            check_out = self._clock()
            doc["checkOut"] = check_out.isoformat()
            check_in = coerce_timestamp(doc.get("checkIn"))
            if check_in is not None:
                doc["duration"] = minutes_between(check_in, check_out)
            if location:
                doc["checkOutLocation"] = location.to_dict()
            doc["needsReview"] = bool(needs_review)
            closed = True

        self._store.modify(ATTENDANCE, record_id, _close)
        return closed

    def correct_record(self, record_id: str, *, check_in: datetime, check_out: Optional[datetime]) -> bool:
        def _correct(doc: dict) -> None:
            doc["checkIn"] = check_in.isoformat()
            if check_out is None:
                doc.pop("checkOut", None)
                doc.pop("duration", None)
            else:
                doc["checkOut"] = check_out.isoformat()
                doc["duration"] = minutes_between(check_in, check_out)

        return self._store.modify(ATTENDANCE, record_id, _correct)
