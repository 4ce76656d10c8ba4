from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceFilter, AttendanceRecord, status_breakdown
from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_str, require_int
from ..core.enums import AttendanceType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import ACCOUNT_TAKEN_MESSAGE, account_updates, build_account
from .model import Parent, ParentProfile
from .repository import ParentRepository

NOT_FOUND_MESSAGE = "Orang tua tidak ditemukan"
NO_ACCESS_MESSAGE = "Anda tidak memiliki akses ke data siswa ini"


def parent_profile(data: dict, *, current: Optional[Parent] = None) -> ParentProfile:
    def pick(key):
        if key in data:
            return data.get(key)
        return getattr(current, key, None) if current else None

    return ParentProfile(
        siswa_id=require_int(pick("siswa_id"), "Siswa"),
        hubungan=optional_str(pick("hubungan")),
        pekerjaan=optional_str(pick("pekerjaan")),
        alamat=optional_str(pick("alamat")),
    )


class ParentService:
    """Guardian accounts (admin/operator) and the guardian's own view of their children."""

    def __init__(
        self,
        parents: ParentRepository,
        users: UserRepository,
        students: StudentRepository,
        attendance: AttendanceRepository,
    ):
        self._parents = parents
        self._users = users
        self._students = students
        self._attendance = attendance

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Parent]:
        return self._parents.list_all(search=search)

    def get(self, parent_id: int) -> Parent:
        parent = self._parents.get_by_id(parent_id)
        if not parent:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return parent

    def create(self, data: dict) -> Parent:
        account = build_account(data)
        profile = parent_profile(data)
        self._require_student(profile.siswa_id)
        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        return self.get(self._parents.create(account=account, profile=profile))

    def update(self, parent_id: int, data: dict) -> Parent:
        current = self.get(parent_id)
        fields = account_updates(data)
        profile = parent_profile(data, current=current)
        self._require_student(profile.siswa_id)
        if self._users.has_conflict(
            username=fields.get("username"), email=fields.get("email"), exclude_user_id=current.user_id
        ):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)
        self._parents.update(parent_id, account_fields=fields, profile=profile)
        return self.get(parent_id)

    def delete(self, parent_id: int) -> None:
        if not self._parents.delete(parent_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    def children(self, user: User) -> list[dict]:
        out: list[dict] = []
        for link in self._parents.list_for_user(user.id):
            student = self._students.get_by_id(link.siswa_id)
            if student is None:
                continue
            out.append(
                {
                    "orang_tua_id": link.id,
                    "hubungan": link.hubungan,
                    "siswa_id": student.id,
                    "nama_siswa": student.full_name,
                    "nis": student.nis,
                    "nisn": student.nisn,
                    "barcode_id": student.barcode_id,
                    "tanggal_lahir": student.tanggal_lahir,
                    "nama_kelas": student.nama_kelas,
                }
            )
        return out

    def child_attendance(
        self,
        user: User,
        siswa_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        attendance_type: AttendanceType = AttendanceType.SCHOOL,
    ) -> Sequence[AttendanceRecord]:
        self._require_own_child(user, siswa_id)
        return self._attendance.list_records(
            AttendanceFilter(
                siswa_id=siswa_id, start_date=start_date, end_date=end_date, attendance_type=attendance_type
            )
        )

    def child_stats(
        self, user: User, siswa_id: int, *, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> dict:
        self._require_own_child(user, siswa_id)
        out = {}
        for kind in AttendanceType:
            counts = self._attendance.count_by_status(
                AttendanceFilter(siswa_id=siswa_id, start_date=start_date, end_date=end_date, attendance_type=kind)
            )
            out[kind.value] = status_breakdown(counts)
        return out

    def _require_own_child(self, user: User, siswa_id: int) -> None:
        if not any(link.siswa_id == siswa_id for link in self._parents.list_for_user(user.id)):
            raise AuthorizationError(NO_ACCESS_MESSAGE)

    def _require_student(self, siswa_id: int) -> None:
        if self._students.get_by_id(siswa_id) is None:
            raise ValidationError("Siswa tidak ditemukan")
