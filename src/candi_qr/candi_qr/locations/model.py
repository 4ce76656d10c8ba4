from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Titik lokasi absensi: pusat (lat/lon) dan radius dalam meter."""

    id: int
    name: str
    latitude: float
    longitude: float
    radius: float
    is_active: bool = True
    description: Optional[str] = None


@dataclass(frozen=True)
class LocationFields:
    name: str
    latitude: float
    longitude: float
    radius: float
    is_active: bool = True
    description: Optional[str] = None
