from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..users.model import User


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float
    accuracy: Optional[float] = None

    def to_dict(self) -> dict:
        out = {"lat": self.lat, "lng": self.lng}
        if self.accuracy is not None:
            out["accuracy"] = self.accuracy
        return out


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out pair.

    A record without ``check_out`` is open. ``duration_minutes`` is whatever
    the store holds; use the resolver to get the authoritative duration.
    """

    record_id: str
    user_id: str
    user_name: str
    check_in: datetime
    check_out: Optional[datetime] = None
    duration_minutes: Optional[float] = None
    project_id: Optional[str] = None
    location: Optional[GeoPoint] = None
    check_out_location: Optional[GeoPoint] = None
    auto_closed: bool = False
    needs_review: bool = False

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class ActiveShift:
    """The most recently started open record of one user."""

    user: User
    record: AttendanceRecord
    is_stale: bool = False
