from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M


@dataclass(frozen=True)
class Geofence:
    lat: float = 0.0
    lng: float = 0.0
    radius: float = DEFAULT_GEOFENCE_RADIUS_M
    enabled: bool = False


@dataclass(frozen=True)
class Project:
    """Domain entity: worksite staff clock in at."""

    project_id: str
    name: str
    geofence: Geofence = field(default_factory=Geofence)
    assigned_user_ids: Tuple[str, ...] = ()
