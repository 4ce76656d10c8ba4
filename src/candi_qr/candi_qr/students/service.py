from __future__ import annotations

import io
import logging
import uuid
from typing import Optional, Sequence

import qrcode

from ..common.validators import optional_date, optional_str, require_int, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from ..users.service import ACCOUNT_TAKEN_MESSAGE, account_updates, build_account
from .model import Student, StudentProfile
from .repository import StudentRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Siswa tidak ditemukan"


def new_barcode_id() -> str:
    return uuid.uuid4().hex[:12].upper()


def student_profile(data: dict, *, current: Optional[Student] = None) -> StudentProfile:
    """Validate the siswa columns; on update, missing fields keep their current value."""

    def pick(key):
        if key in data:
            return data.get(key)
        return getattr(current, key, None) if current else None

    barcode_id = optional_str(pick("barcode_id")) or new_barcode_id()
    return StudentProfile(
        nis=require_non_empty(pick("nis"), "NIS"),
        kelas_id=require_int(pick("kelas_id"), "Kelas"),
        barcode_id=barcode_id,
        nisn=optional_str(pick("nisn")),
        jenis_kelamin=optional_str(pick("jenis_kelamin")),
        alamat=optional_str(pick("alamat")),
        tanggal_lahir=optional_date(pick("tanggal_lahir"), "Tanggal lahir"),
        nama_ortu=optional_str(pick("nama_ortu")),
        phone_ortu=optional_str(pick("phone_ortu")),
    )


def render_qr_png(payload: str) -> io.BytesIO:
    img = qrcode.make(payload)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


class StudentService:
    def __init__(self, students: StudentRepository, users: UserRepository, classes):
        self._students = students
        self._users = users
        self._classes = classes

    def list_all(self, *, kelas_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Student]:
        return self._students.list_all(kelas_id=kelas_id, search=search)

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return student

    def create(self, data: dict) -> Student:
        account = build_account(data)
        profile = student_profile(data)
        self._require_class(profile.kelas_id)

        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        if self._students.has_conflict(nis=profile.nis, barcode_id=profile.barcode_id):
            raise ConflictError("NIS atau barcode sudah digunakan")

        student_id = self._students.create(account=account, profile=profile)
        logger.info("Created student id=%s nis=%s", student_id, profile.nis)
        return self.get(student_id)

    def update(self, student_id: int, data: dict) -> Student:
        current = self.get(student_id)
        fields = account_updates(data)
        profile = student_profile(data, current=current)
        self._require_class(profile.kelas_id)

        if self._users.has_conflict(
            username=fields.get("username"), email=fields.get("email"), exclude_user_id=current.user_id
        ):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        if self._students.has_conflict(nis=profile.nis, barcode_id=profile.barcode_id, exclude_id=student_id):
            raise ConflictError("NIS atau barcode sudah digunakan")

        self._students.update(student_id, account_fields=fields, profile=profile)
        return self.get(student_id)

    def delete(self, student_id: int) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Deleted student id=%s", student_id)

    def qrcode_png(self, student_id: int) -> tuple[io.BytesIO, str]:
        student = self.get(student_id)
        return render_qr_png(student.barcode_id), f"qrcode_{student.nis}.png"

    def _require_class(self, kelas_id: int) -> None:
        if self._classes.get_by_id(kelas_id) is None:
            raise ValidationError("Kelas tidak ditemukan")
