from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_str, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from .model import Subject
from .repository import SubjectRepository

NOT_FOUND_MESSAGE = "Mata pelajaran tidak ditemukan"


class SubjectService:
    def __init__(self, subjects: SubjectRepository, schedules):
        self._subjects = subjects
        self._schedules = schedules

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Subject]:
        return self._subjects.list_all(search=search)

    def get(self, subject_id: int) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return subject

    def create(self, data: dict) -> Subject:
        nama = require_non_empty(data.get("nama_pelajaran"), "Nama pelajaran")
        kode = require_non_empty(data.get("kode_pelajaran"), "Kode pelajaran")
        if self._subjects.code_taken(kode):
            raise ConflictError("Kode mata pelajaran sudah digunakan")
        subject_id = self._subjects.create(
            nama_pelajaran=nama, kode_pelajaran=kode, deskripsi=optional_str(data.get("deskripsi"))
        )
        return self.get(subject_id)

    def update(self, subject_id: int, data: dict) -> Subject:
        current = self.get(subject_id)
        nama = require_non_empty(data.get("nama_pelajaran", current.nama_pelajaran), "Nama pelajaran")
        kode = require_non_empty(data.get("kode_pelajaran", current.kode_pelajaran), "Kode pelajaran")
        deskripsi = optional_str(data["deskripsi"]) if "deskripsi" in data else current.deskripsi
        if self._subjects.code_taken(kode, exclude_id=subject_id):
            raise ConflictError("Kode mata pelajaran sudah digunakan")
        self._subjects.update(subject_id, nama_pelajaran=nama, kode_pelajaran=kode, deskripsi=deskripsi)
        return self.get(subject_id)

    def delete(self, subject_id: int) -> None:
        self.get(subject_id)
        if self._schedules.count_for_subject(subject_id) > 0:
            raise ConflictError("Tidak dapat menghapus mata pelajaran yang masih digunakan dalam jadwal")
        self._subjects.delete(subject_id)
