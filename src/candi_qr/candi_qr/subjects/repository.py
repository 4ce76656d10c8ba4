from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def list_all(self, *, search: Optional[str] = None) -> Sequence[Subject]:
        raise NotImplementedError

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def code_taken(self, kode_pelajaran: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, *, nama_pelajaran: str, kode_pelajaran: str, deskripsi: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, subject_id: int, *, nama_pelajaran: str, kode_pelajaran: str, deskripsi: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, subject_id: int) -> bool:
        raise NotImplementedError
