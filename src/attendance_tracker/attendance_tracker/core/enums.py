from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RecordStatus(str, Enum):
    """Display state of an attendance record in history views."""

    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    STALE = "stale"


class BroadcastType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    LOCAL = "local"
