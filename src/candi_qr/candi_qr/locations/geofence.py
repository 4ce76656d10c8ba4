from __future__ import annotations

import math
from typing import Iterable, Optional

from .model import Location

EARTH_RADIUS_M = 6371e3


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two WGS84 points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def find_containing_location(latitude: float, longitude: float, locations: Iterable[Location]) -> Optional[Location]:
    for location in locations:
        if not location.is_active:
            continue
        if haversine_distance_m(latitude, longitude, location.latitude, location.longitude) <= location.radius:
            return location
    return None
