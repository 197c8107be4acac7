from __future__ import annotations

import math
from typing import Optional

from ..attendance.model import GeoPoint
from ..core.constants import EARTH_RADIUS_M
from .model import Geofence


def distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle (haversine) distance in metres."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def contains(fence: Optional[Geofence], point: Optional[GeoPoint]) -> bool:
    """True when the point is inside the circle; a disabled fence contains everything.

    An enabled fence with no known position is treated as outside.
    """

    if fence is None or not fence.enabled:
        return True
    if point is None:
        return False
    return distance_m(point.lat, point.lng, fence.lat, fence.lng) <= fence.radius
