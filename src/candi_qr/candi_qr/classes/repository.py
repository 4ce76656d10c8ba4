from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassFields, SchoolClass


class ClassRepository(Protocol):
    def list_all(self, *, tingkat: Optional[str] = None, search: Optional[str] = None) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def name_taken(self, nama_kelas: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, fields: ClassFields) -> int:
        raise NotImplementedError

    def update(self, class_id: int, fields: ClassFields) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
