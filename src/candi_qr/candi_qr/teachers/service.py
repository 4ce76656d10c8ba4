from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_date, optional_int, optional_str, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from ..users.service import ACCOUNT_TAKEN_MESSAGE, account_updates, build_account
from .model import Teacher, TeacherProfile
from .repository import TeacherRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Guru tidak ditemukan"


def teacher_profile(data: dict, *, current: Optional[Teacher] = None) -> TeacherProfile:
    def pick(key):
        if key in data:
            return data.get(key)
        return getattr(current, key, None) if current else None

    return TeacherProfile(
        nip=require_non_empty(pick("nip"), "NIP"),
        mata_pelajaran_id=optional_int(pick("mata_pelajaran_id"), "Mata pelajaran"),
        jenis_kelamin=optional_str(pick("jenis_kelamin")),
        alamat=optional_str(pick("alamat")),
        tanggal_lahir=optional_date(pick("tanggal_lahir"), "Tanggal lahir"),
    )


class TeacherService:
    def __init__(self, teachers: TeacherRepository, users: UserRepository, subjects):
        self._teachers = teachers
        self._users = users
        self._subjects = subjects

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Teacher]:
        return self._teachers.list_all(search=search)

    def get(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return teacher

    def create(self, data: dict) -> Teacher:
        account = build_account(data)
        profile = teacher_profile(data)
        self._require_subject(profile.mata_pelajaran_id)

        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        if self._teachers.has_conflict(nip=profile.nip):
            raise ConflictError("NIP sudah digunakan")

        teacher_id = self._teachers.create(account=account, profile=profile)
        logger.info("Created teacher id=%s nip=%s", teacher_id, profile.nip)
        return self.get(teacher_id)

    def update(self, teacher_id: int, data: dict) -> Teacher:
        current = self.get(teacher_id)
        fields = account_updates(data)
        profile = teacher_profile(data, current=current)
        self._require_subject(profile.mata_pelajaran_id)

        if self._users.has_conflict(
            username=fields.get("username"), email=fields.get("email"), exclude_user_id=current.user_id
        ):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        if self._teachers.has_conflict(nip=profile.nip, exclude_id=teacher_id):
            raise ConflictError("NIP sudah digunakan")

        self._teachers.update(teacher_id, account_fields=fields, profile=profile)
        return self.get(teacher_id)

    def delete(self, teacher_id: int) -> None:
        if not self._teachers.delete(teacher_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    def _require_subject(self, subject_id: Optional[int]) -> None:
        if subject_id is not None and self._subjects.get_by_id(subject_id) is None:
            raise ValidationError("Mata pelajaran tidak ditemukan")
