from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_str, parse_time, require_choice, require_int
from ..core.enums import Role, Weekday
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.model import User
from .model import Schedule, ScheduleFields
from .repository import ScheduleRepository

NOT_FOUND_MESSAGE = "Jadwal tidak ditemukan"


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, *, classes, subjects, teachers):
        self._schedules = schedules
        self._classes = classes
        self._subjects = subjects
        self._teachers = teachers

    def list_for(
        self,
        user: User,
        *,
        kelas_id: Optional[int] = None,
        guru_id: Optional[int] = None,
        mata_pelajaran_id: Optional[int] = None,
        hari: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Schedule]:
        """Teachers only ever see their own lessons."""
        if user.role == Role.TEACHER:
            teacher = self._teachers.get_by_user_id(user.id)
            if teacher is None:
                return []
            guru_id = teacher.id

        return self._schedules.list_all(
            kelas_id=kelas_id,
            guru_id=guru_id,
            mata_pelajaran_id=mata_pelajaran_id,
            hari=require_choice(hari, "Hari", Weekday) if hari else None,
            search=search,
        )

    def get(self, schedule_id: int) -> Schedule:
        schedule = self._schedules.get_by_id(schedule_id)
        if not schedule:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return schedule

    def create(self, data: dict) -> Schedule:
        fields = self._fields(data)
        self._check_overlap(fields)
        return self.get(self._schedules.create(fields))

    def update(self, schedule_id: int, data: dict) -> Schedule:
        current = self.get(schedule_id)
        merged = {
            "kelas_id": current.kelas_id,
            "mata_pelajaran_id": current.mata_pelajaran_id,
            "guru_id": current.guru_id,
            "hari": current.hari.value,
            "jam_mulai": current.jam_mulai,
            "jam_selesai": current.jam_selesai,
            "ruang": current.ruang,
            "semester": current.semester,
            "tahun_ajaran": current.tahun_ajaran,
        }
        merged.update(data)
        fields = self._fields(merged)
        self._check_overlap(fields, exclude_id=schedule_id)
        self._schedules.update(schedule_id, fields)
        return self.get(schedule_id)

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(schedule_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    def _fields(self, data: dict) -> ScheduleFields:
        fields = ScheduleFields(
            kelas_id=require_int(data.get("kelas_id"), "Kelas"),
            mata_pelajaran_id=require_int(data.get("mata_pelajaran_id"), "Mata pelajaran"),
            guru_id=require_int(data.get("guru_id"), "Guru"),
            hari=require_choice(data.get("hari"), "Hari", Weekday),
            jam_mulai=parse_time(data.get("jam_mulai"), "Jam mulai"),
            jam_selesai=parse_time(data.get("jam_selesai"), "Jam selesai"),
            ruang=optional_str(data.get("ruang")),
            semester=optional_str(data.get("semester")),
            tahun_ajaran=optional_str(data.get("tahun_ajaran")),
        )
        if fields.jam_selesai <= fields.jam_mulai:
            raise ValidationError("Jam selesai harus setelah jam mulai")
        if self._subjects.get_by_id(fields.mata_pelajaran_id) is None:
            raise ValidationError("Mata pelajaran tidak ditemukan")
        if self._classes.get_by_id(fields.kelas_id) is None:
            raise ValidationError("Kelas tidak ditemukan")
        if self._teachers.get_by_id(fields.guru_id) is None:
            raise ValidationError("Guru tidak ditemukan")
        return fields

    def _check_overlap(self, fields: ScheduleFields, *, exclude_id: Optional[int] = None) -> None:
        if self._schedules.has_overlap(
            kelas_id=fields.kelas_id,
            guru_id=fields.guru_id,
            hari=fields.hari,
            jam_mulai=fields.jam_mulai,
            jam_selesai=fields.jam_selesai,
            exclude_id=exclude_id,
        ):
            raise ConflictError("Terdapat konflik jadwal dengan kelas atau guru yang sama pada waktu tersebut")
