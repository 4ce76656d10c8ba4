from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..common.validators import require_choice
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from ..parents.service import parent_profile
from ..students.service import student_profile
from ..teachers.service import teacher_profile
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import ACCOUNT_TAKEN_MESSAGE, account_updates, build_account

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Operator tidak ditemukan"

# admin and operator accounts are created by admins only
BULK_ROLES = (Role.STUDENT, Role.TEACHER, Role.PARENT)


class OperatorService:
    """Operator accounts (admin only) and the operator's school-wide tools."""

    def __init__(self, users: UserRepository, *, students, teachers, parents, classes, subjects, attendance):
        self._users = users
        self._students = students
        self._teachers = teachers
        self._parents = parents
        self._classes = classes
        self._subjects = subjects
        self._attendance = attendance

    def list_operators(self, *, search: Optional[str] = None) -> list[dict]:
        users, _ = self._users.list_users(role=Role.OPERATOR, search=search, limit=1000, offset=0)
        return [u.public() for u in users]

    def get_operator(self, user_id: int) -> dict:
        return self._require_operator(user_id).public()

    def create_operator(self, data: dict) -> dict:
        account = build_account(data)
        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        user_id = self._users.create_user(
            username=account.username,
            email=account.email,
            password_hash=account.password_hash,
            role=Role.OPERATOR,
            full_name=account.full_name,
            phone=account.phone,
        )
        return self.get_operator(user_id)

    def update_operator(self, user_id: int, data: dict) -> dict:
        self._require_operator(user_id)
        fields = account_updates(data)
        if not fields:
            raise ValidationError("Tidak ada data yang diupdate")
        if self._users.has_conflict(
            username=fields.get("username"), email=fields.get("email"), exclude_user_id=user_id
        ):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        self._users.update_fields(user_id, **fields)
        return self.get_operator(user_id)

    def delete_operator(self, user_id: int) -> None:
        self._require_operator(user_id)
        self._users.delete_by_id(user_id)

    def _require_operator(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user or user.role != Role.OPERATOR:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return user

    def school_data(self, *, today: date) -> dict:
        return {
            "total_siswa": self._students.count(),
            "total_guru": self._teachers.count(),
            "total_kelas": self._classes.count(),
            "total_orang_tua": self._parents.count(),
            "absensi_hari_ini": self._attendance.count_on(today),
            "absensi_bulan_ini": self._attendance.count_in_month(today),
        }

    def list_users(
        self,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> dict:
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        role_filter = require_choice(role, "Role", Role) if role else None
        users, total = self._users.list_users(role=role_filter, search=search, limit=limit, offset=(page - 1) * limit)
        return {
            "users": [u.public() for u in users],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": (total + limit - 1) // limit,
            },
        }

    def bulk_create(self, rows: Any) -> dict:
        """Create each row on its own; a bad row is reported and the batch goes on."""
        if not isinstance(rows, list) or not rows:
            raise ValidationError("Data users tidak valid")

        created: list[dict] = []
        errors: list[dict] = []
        for row in rows:
            row = row if isinstance(row, dict) else {}
            try:
                user_id = self._create_one(row)
            except DomainError as e:
                errors.append({"username": row.get("username") or "N/A", "error": str(e)})
                continue
            created.append(
                {"username": row["username"], "full_name": row["full_name"], "role": row["role"], "user_id": user_id}
            )

        logger.info("Bulk create finished: %d created, %d failed", len(created), len(errors))
        return {"success": created, "errors": errors}

    def _create_one(self, row: dict) -> int:
        if not all(row.get(k) for k in ("username", "password", "role", "full_name")):
            raise ValidationError("Field wajib tidak lengkap")
        role = require_choice(row["role"], "Role", Role)
        if role not in BULK_ROLES:
            raise ValidationError("Role harus salah satu dari: " + ", ".join(r.value for r in BULK_ROLES))
        account = build_account(row)
        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)

        extra = row.get("additional_data") or {}
        if role == Role.STUDENT:
            profile = student_profile(extra)
            if self._classes.get_by_id(profile.kelas_id) is None:
                raise ValidationError("Kelas tidak ditemukan")
            if self._students.has_conflict(nis=profile.nis, barcode_id=profile.barcode_id):
                raise ConflictError("NIS atau barcode sudah digunakan")
            self._students.create(account=account, profile=profile)
        elif role == Role.TEACHER:
            profile = teacher_profile(extra)
            if profile.mata_pelajaran_id is not None and self._subjects.get_by_id(profile.mata_pelajaran_id) is None:
                raise ValidationError("Mata pelajaran tidak ditemukan")
            if self._teachers.has_conflict(nip=profile.nip):
                raise ConflictError("NIP sudah digunakan")
            self._teachers.create(account=account, profile=profile)
        else:
            profile = parent_profile(extra)
            if self._students.get_by_id(profile.siswa_id) is None:
                raise ValidationError("Siswa tidak ditemukan")
            self._parents.create(account=account, profile=profile)

        user = self._users.get_by_login(account.username)
        return user.id if user else 0
