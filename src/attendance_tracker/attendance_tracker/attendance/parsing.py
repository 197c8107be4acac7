"""Parse-and-validate step at the store boundary.

Backends hand over loosely typed rows/documents; this module turns them into
``AttendanceRecord`` values or raises ``RecordValidationError``. Nothing past
this point has to guess whether a field is a timestamp.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import coerce_timestamp
from ..core.exceptions import RecordValidationError
from .model import AttendanceRecord, GeoPoint

logger = logging.getLogger(__name__)


def _optional_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_geopoint(value: Any) -> Optional[GeoPoint]:
    if not isinstance(value, Mapping):
        return None
    lat = _optional_number(value.get("lat"))
    lng = _optional_number(value.get("lng"))
    if lat is None or lng is None:
        return None
    return GeoPoint(lat=lat, lng=lng, accuracy=_optional_number(value.get("accuracy")))


def parse_record(raw: Mapping[str, Any]) -> AttendanceRecord:
    record_id = raw.get("id")
    if record_id is None or str(record_id) == "":
        raise RecordValidationError(record_id, "missing id")

    user_id = raw.get("userId")
    if user_id is None or str(user_id) == "":
        raise RecordValidationError(record_id, "missing userId")

    check_in = coerce_timestamp(raw.get("checkIn"))
    if check_in is None:
        raise RecordValidationError(record_id, "missing or invalid checkIn")

    check_out = coerce_timestamp(raw.get("checkOut"))
    if check_out is None and raw.get("checkOut") not in (None, ""):
        logger.warning("Record %r: unreadable checkOut %r, treating it as open", record_id, raw.get("checkOut"))
    if check_out is not None and check_out < check_in:
        raise RecordValidationError(record_id, "checkOut is before checkIn")

    project_id = raw.get("projectId")
    return AttendanceRecord(
        record_id=str(record_id),
        user_id=str(user_id),
        user_name=str(raw.get("userName") or ""),
        check_in=check_in,
        check_out=check_out,
        duration_minutes=_optional_number(raw.get("duration")),
        project_id=str(project_id) if project_id else None,
        location=parse_geopoint(raw.get("location")),
        check_out_location=parse_geopoint(raw.get("checkOutLocation")),
        auto_closed=bool(raw.get("autoClosed") or False),
        needs_review=bool(raw.get("needsReview") or False),
    )


def parse_records(rows: Iterable[Mapping[str, Any]]) -> list[AttendanceRecord]:
    """Parse every row, dropping the malformed ones with a warning."""

    records: list[AttendanceRecord] = []
    for raw in rows:
        try:
            records.append(parse_record(raw))
        except RecordValidationError as e:
            logger.warning("Skipping invalid attendance record: %s", e)
    return records


def to_document(record: AttendanceRecord) -> dict:
    """Inverse of parse_record, used by the local store."""

    doc: dict[str, Any] = {
        "id": record.record_id,
        "userId": record.user_id,
        "userName": record.user_name,
        "checkIn": record.check_in.isoformat(),
    }
    if record.check_out is not None:
        doc["checkOut"] = record.check_out.isoformat()
    if record.duration_minutes is not None:
        doc["duration"] = record.duration_minutes
    if record.project_id:
        doc["projectId"] = record.project_id
    if record.location:
        doc["location"] = record.location.to_dict()
    if record.check_out_location:
        doc["checkOutLocation"] = record.check_out_location.to_dict()
    if record.auto_closed:
        doc["autoClosed"] = True
    if record.needs_review:
        doc["needsReview"] = True
    return doc
