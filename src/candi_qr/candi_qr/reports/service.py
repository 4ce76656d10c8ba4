from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceFilter, status_breakdown
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceType, Role, Weekday
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User

EXPORT_FIELDS = [
    "tanggal",
    "nis",
    "nama_siswa",
    "nama_kelas",
    "attendance_type",
    "nama_pelajaran",
    "jam_masuk",
    "jam_pulang",
    "status",
    "keterangan",
]


@dataclass(frozen=True)
class ExportData:
    start: date
    end: date
    rows: list[dict]


def _hms(value) -> str:
    return value.strftime("%H:%M:%S") if value else ""


class ReportService:
    def __init__(self, attendance: AttendanceRepository, *, students, teachers, classes, schedules):
        self._attendance = attendance
        self._students = students
        self._teachers = teachers
        self._classes = classes
        self._schedules = schedules

    def dashboard(self, user: User, *, today: date) -> dict:
        if user.role == Role.TEACHER:
            return self._teacher_dashboard(user, today=today)

        today_counts = self._attendance.count_by_status(
            AttendanceFilter(tanggal=today, attendance_type=AttendanceType.SCHOOL)
        )
        breakdown = status_breakdown(today_counts)
        return {
            "tanggal": today,
            "total_siswa": self._students.count(),
            "total_guru": self._teachers.count(),
            "total_kelas": self._classes.count(),
            "absensi_hari_ini": self._attendance.count_on(today),
            "absensi_bulan_ini": self._attendance.count_in_month(today),
            "siswa_terlambat": breakdown["terlambat"],
            "status_hari_ini": breakdown,
        }

    def _teacher_dashboard(self, user: User, *, today: date) -> dict:
        teacher = self._teachers.get_by_user_id(user.id)
        if teacher is None:
            raise NotFoundError("Data guru tidak ditemukan")

        lessons = self._schedules.list_all(guru_id=teacher.id, hari=Weekday.from_index(today.weekday()))
        counts = self._attendance.count_by_status(
            AttendanceFilter(
                tanggal=today,
                kelas_ids=list(self._schedules.class_ids_for_teacher(teacher.id)),
                attendance_type=AttendanceType.CLASS,
            )
        )
        return {
            "tanggal": today,
            "jadwal_hari_ini": lessons,
            "absensi_kelas_hari_ini": status_breakdown(counts),
        }

    def stats(
        self,
        *,
        start_date: date,
        end_date: date,
        kelas_id: Optional[int] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> dict:
        if end_date < start_date:
            raise ValidationError("Tanggal akhir tidak boleh sebelum tanggal mulai")
        counts = self._attendance.count_by_status(
            AttendanceFilter(
                start_date=start_date, end_date=end_date, kelas_id=kelas_id, attendance_type=attendance_type
            )
        )
        return {
            "periode": {"start_date": start_date, "end_date": end_date},
            "status": status_breakdown(counts),
        }

    def export_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        kelas_id: Optional[int] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> ExportData:
        if end_date < start_date:
            raise ValidationError("Tanggal akhir tidak boleh sebelum tanggal mulai")
        records = self._attendance.list_records(
            AttendanceFilter(
                start_date=start_date,
                end_date=end_date,
                kelas_id=kelas_id,
                attendance_type=attendance_type,
                limit=100000,
            )
        )
        rows = [
            {
                "tanggal": r.tanggal.isoformat(),
                "nis": r.nis or "",
                "nama_siswa": r.nama_siswa or "",
                "nama_kelas": r.nama_kelas or "",
                "attendance_type": r.attendance_type.value,
                "nama_pelajaran": r.nama_pelajaran or "",
                "jam_masuk": _hms(r.jam_masuk),
                "jam_pulang": _hms(r.jam_pulang),
                "status": r.status.label,
                "keterangan": r.keterangan or "",
            }
            for r in records
        ]
        return ExportData(start=start_date, end=end_date, rows=rows)
