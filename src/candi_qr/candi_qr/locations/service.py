from __future__ import annotations

from typing import Sequence

from ..common.validators import optional_str, parse_bool, require_float, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Location, LocationFields
from .repository import LocationRepository

NOT_FOUND_MESSAGE = "Lokasi tidak ditemukan"


class LocationService:
    def __init__(self, locations: LocationRepository):
        self._locations = locations

    def list_all(self, *, active_only: bool = False) -> Sequence[Location]:
        return self._locations.list_all(active_only=active_only)

    def get(self, location_id: int) -> Location:
        location = self._locations.get_by_id(location_id)
        if not location:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return location

    def create(self, data: dict) -> Location:
        return self.get(self._locations.create(self._fields(data)))

    def update(self, location_id: int, data: dict) -> Location:
        current = self.get(location_id)
        merged = {
            "name": current.name,
            "latitude": current.latitude,
            "longitude": current.longitude,
            "radius": current.radius,
            "is_active": current.is_active,
            "description": current.description,
        }
        merged.update(data)
        self._locations.update(location_id, self._fields(merged))
        return self.get(location_id)

    def delete(self, location_id: int) -> None:
        if not self._locations.delete(location_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    @staticmethod
    def _fields(data: dict) -> LocationFields:
        latitude = require_float(data.get("latitude"), "Latitude")
        longitude = require_float(data.get("longitude"), "Longitude")
        radius = require_float(data.get("radius"), "Radius")
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise ValidationError("Koordinat tidak valid")
        if radius <= 0:
            raise ValidationError("Radius harus lebih dari 0")
        return LocationFields(
            name=require_non_empty(data.get("name"), "Nama lokasi"),
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            is_active=parse_bool(data.get("is_active", True), "is_active"),
            description=optional_str(data.get("description")),
        )
