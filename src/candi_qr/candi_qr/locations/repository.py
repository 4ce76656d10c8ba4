from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Location, LocationFields


class LocationRepository(Protocol):
    def list_all(self, *, active_only: bool = False) -> Sequence[Location]:
        raise NotImplementedError

    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def create(self, fields: LocationFields) -> int:
        raise NotImplementedError

    def update(self, location_id: int, fields: LocationFields) -> bool:
        raise NotImplementedError

    def delete(self, location_id: int) -> bool:
        raise NotImplementedError
