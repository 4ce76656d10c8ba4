from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_int, optional_str, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository
from .model import ClassFields, SchoolClass
from .repository import ClassRepository

NOT_FOUND_MESSAGE = "Kelas tidak ditemukan"


class ClassService:
    def __init__(self, classes: ClassRepository, students: StudentRepository, teachers: TeacherRepository):
        self._classes = classes
        self._students = students
        self._teachers = teachers

    def list_all(self, *, tingkat: Optional[str] = None, search: Optional[str] = None) -> Sequence[SchoolClass]:
        return self._classes.list_all(tingkat=tingkat, search=search)

    def get(self, class_id: int) -> SchoolClass:
        row = self._classes.get_by_id(class_id)
        if not row:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return row

    def create(self, data: dict) -> SchoolClass:
        fields = self._fields(data)
        if self._classes.name_taken(fields.nama_kelas):
            raise ConflictError("Nama kelas sudah digunakan")
        return self.get(self._classes.create(fields))

    def update(self, class_id: int, data: dict) -> SchoolClass:
        current = self.get(class_id)
        merged = {
            "nama_kelas": current.nama_kelas,
            "tingkat": current.tingkat,
            "jurusan": current.jurusan,
            "tahun_ajaran": current.tahun_ajaran,
            "wali_kelas_id": current.wali_kelas_id,
        }
        merged.update(data)
        fields = self._fields(merged)
        if self._classes.name_taken(fields.nama_kelas, exclude_id=class_id):
            raise ConflictError("Nama kelas sudah digunakan")
        self._classes.update(class_id, fields)
        return self.get(class_id)

    def delete(self, class_id: int) -> None:
        self.get(class_id)
        if self._students.count(kelas_id=class_id) > 0:
            raise ConflictError("Tidak dapat menghapus kelas yang masih memiliki siswa")
        self._classes.delete(class_id)

    def students_of(self, class_id: int) -> Sequence[Student]:
        self.get(class_id)
        return self._students.list_all(kelas_id=class_id)

    def _fields(self, data: dict) -> ClassFields:
        wali_kelas_id = optional_int(data.get("wali_kelas_id"), "Wali kelas")
        if wali_kelas_id is not None and self._teachers.get_by_id(wali_kelas_id) is None:
            raise ValidationError("Wali kelas tidak ditemukan")
        return ClassFields(
            nama_kelas=require_non_empty(data.get("nama_kelas"), "Nama kelas"),
            tingkat=optional_str(data.get("tingkat")),
            jurusan=optional_str(data.get("jurusan")),
            tahun_ajaran=optional_str(data.get("tahun_ajaran")),
            wali_kelas_id=wali_kelas_id,
        )
