from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local, shift_time
from ..common.validators import optional_int, optional_str, require_choice, require_float, require_non_empty
from ..core.constants import CLASS_SCAN_OPENS_MINUTES
from ..core.enums import AttendanceStatus, AttendanceType, Role, Weekday
from ..core.exceptions import (
    DuplicateScanError,
    NotFoundError,
    OutsideGeofenceError,
    ScheduleNotActiveError,
    UnknownBarcodeError,
    ValidationError,
)
from ..locations.geofence import find_containing_location
from ..locations.repository import LocationRepository
from ..schedules.model import Schedule
from ..schedules.repository import ScheduleRepository
from ..settings.service import SettingsService
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository
from ..users.model import User
from .factory import AttendanceStrategyFactory
from .model import SCHOOL_SCHEDULE_ID, AttendanceFilter, AttendanceRecord, NewCheckIn, StatusCounts
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ACTION_CHECK_IN = "check_in"
ACTION_CHECK_OUT = "check_out"


@dataclass(frozen=True)
class ScanRequest:
    barcode_id: str
    attendance_type: AttendanceType
    jadwal_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    requested_status: Optional[AttendanceStatus] = None
    geolocated: bool = False

    @classmethod
    def from_payload(cls, data: dict, *, geolocated: bool = False) -> "ScanRequest":
        barcode_id = require_non_empty(data.get("barcode_id"), "Barcode ID")
        attendance_type = require_choice(data.get("attendance_type") or "", "Tipe absensi", AttendanceType)
        jadwal_id = optional_int(data.get("jadwal_id"), "Jadwal")
        if attendance_type == AttendanceType.CLASS and jadwal_id is None:
            raise ValidationError("Jadwal pelajaran diperlukan untuk absensi kelas")

        if not geolocated:
            return cls(barcode_id=barcode_id, attendance_type=attendance_type, jadwal_id=jadwal_id)

        if data.get("latitude") in (None, "") or data.get("longitude") in (None, ""):
            raise ValidationError("Lokasi GPS diperlukan untuk absensi")
        code = optional_str(data.get("status_code")) or AttendanceStatus.PRESENT.code
        requested = AttendanceStatus.from_code(code)
        if requested is None:
            raise ValidationError("Status absensi tidak valid")

        return cls(
            barcode_id=barcode_id,
            attendance_type=attendance_type,
            jadwal_id=jadwal_id,
            latitude=require_float(data.get("latitude"), "Latitude"),
            longitude=require_float(data.get("longitude"), "Longitude"),
            requested_status=requested,
            geolocated=True,
        )


@dataclass(frozen=True)
class ScanResult:
    action: str
    student: Student
    record: AttendanceRecord
    schedule: Optional[Schedule] = None

    @property
    def message(self) -> str:
        kind = "masuk" if self.action == ACTION_CHECK_IN else "pulang"
        return f"Absensi {kind} berhasil. Status: {self.record.status.label}"

    def as_dict(self) -> dict:
        data: dict[str, Any] = {
            "action": self.action,
            "siswa": self.student.summary(),
            "absensi": self.record,
        }
        if self.schedule is not None:
            data["pelajaran"] = self.schedule.lesson()
        return data


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        schedules: ScheduleRepository,
        locations: LocationRepository,
        settings: SettingsService,
        teachers: TeacherRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._schedules = schedules
        self._locations = locations
        self._settings = settings
        self._teachers = teachers
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def scan(self, req: ScanRequest, *, now: datetime | None = None) -> ScanResult:
        """Record a check-in, or the check-out when today's check-in already exists.

        A third scan for the same student, date and context is rejected.
        """
        now = now or now_local()
        settings = self._settings.current()

        if req.geolocated:
            if find_containing_location(req.latitude, req.longitude, self._locations.list_all(active_only=True)) is None:
                logger.info("Scan outside geofence barcode=%s lat=%s lon=%s", req.barcode_id, req.latitude, req.longitude)
                raise OutsideGeofenceError("Anda tidak berada dalam radius lokasi yang diizinkan untuk absensi")
            if not settings.min_attendance_hour <= now.hour <= settings.max_attendance_hour:
                raise ScheduleNotActiveError(
                    f"Absensi hanya bisa dilakukan antara jam {settings.min_attendance_hour:02d}:00 - "
                    f"{settings.max_attendance_hour:02d}:00"
                )

        student = self._students.get_by_barcode(req.barcode_id)
        if not student:
            raise UnknownBarcodeError("Siswa dengan barcode tersebut tidak ditemukan")

        schedule = None
        jadwal_id = SCHOOL_SCHEDULE_ID
        start = settings.school_start_time
        if req.attendance_type == AttendanceType.CLASS:
            schedule = self._active_schedule(req.jadwal_id, student, now)
            jadwal_id = schedule.id
            start = schedule.jam_mulai

        today = now.date()
        existing = self._attendance.get_for_student(
            siswa_id=student.id, tanggal=today, attendance_type=req.attendance_type, jadwal_id=jadwal_id
        )

        if existing is None:
            strategy = self._factory.for_checkin(
                now=now, start=start, grace_minutes=settings.late_threshold_minutes, requested=req.requested_status
            )
            decision = strategy.decide_checkin(now=now, start=start, grace_minutes=settings.late_threshold_minutes)
            record_id = self._attendance.try_create_checkin(
                NewCheckIn(
                    siswa_id=student.id,
                    tanggal=today,
                    attendance_type=req.attendance_type,
                    jadwal_id=jadwal_id,
                    jam_masuk=now.time().replace(microsecond=0),
                    status=decision.status,
                    latitude=req.latitude,
                    longitude=req.longitude,
                    keterangan=decision.note,
                )
            )
            if record_id is not None:
                logger.info("Check-in siswa=%s type=%s status=%s", student.id, req.attendance_type.value, decision.status.value)
                return ScanResult(ACTION_CHECK_IN, student, self._attendance.get_by_id(record_id), schedule)

            # a concurrent scan inserted the row first
            existing = self._attendance.get_for_student(
                siswa_id=student.id, tanggal=today, attendance_type=req.attendance_type, jadwal_id=jadwal_id
            )

        if existing is None or existing.jam_pulang is not None:
            raise DuplicateScanError("Siswa sudah melakukan absensi masuk dan pulang hari ini")

        if not self._attendance.try_record_checkout(
            existing.id,
            jam_pulang=now.time().replace(microsecond=0),
            latitude=req.latitude,
            longitude=req.longitude,
        ):
            raise DuplicateScanError("Siswa sudah melakukan absensi masuk dan pulang hari ini")

        logger.info("Check-out siswa=%s type=%s", student.id, req.attendance_type.value)
        return ScanResult(ACTION_CHECK_OUT, student, self._attendance.get_by_id(existing.id), schedule)

    def _active_schedule(self, jadwal_id: Optional[int], student: Student, now: datetime) -> Schedule:
        schedule = self._schedules.get_by_id(int(jadwal_id or 0))
        if not schedule:
            raise NotFoundError("Jadwal pelajaran tidak ditemukan")
        if schedule.kelas_id != student.kelas_id:
            raise ValidationError("Siswa tidak terdaftar di kelas untuk jadwal ini")

        opens = shift_time(schedule.jam_mulai, minutes=-CLASS_SCAN_OPENS_MINUTES)
        current = now.time()
        if schedule.hari != Weekday.from_index(now.weekday()) or not opens <= current <= schedule.jam_selesai:
            raise ScheduleNotActiveError("Jadwal pelajaran tidak sedang berlangsung")
        return schedule

    def history(
        self,
        user: User,
        *,
        siswa_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> Sequence[AttendanceRecord]:
        """Students only ever see their own records."""
        if user.role == Role.STUDENT:
            student = self._students.get_by_user_id(user.id)
            if student is None:
                raise NotFoundError("Data siswa tidak ditemukan")
            siswa_id = student.id

        return self._attendance.list_records(
            AttendanceFilter(
                siswa_id=siswa_id, start_date=start_date, end_date=end_date, attendance_type=attendance_type
            )
        )

    def list_for(
        self,
        user: User,
        *,
        tanggal: Optional[date] = None,
        kelas_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> Sequence[AttendanceRecord]:
        """Teachers see the records of the classes they teach."""
        kelas_ids = None
        if user.role == Role.TEACHER:
            teacher = self._teachers.get_by_user_id(user.id)
            kelas_ids = list(self._schedules.class_ids_for_teacher(teacher.id)) if teacher else []

        return self._attendance.list_records(
            AttendanceFilter(
                tanggal=tanggal,
                kelas_id=kelas_id,
                kelas_ids=kelas_ids,
                status=status,
                attendance_type=attendance_type,
            )
        )

    def report(
        self,
        *,
        start_date: date,
        end_date: date,
        kelas_id: Optional[int] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> list[dict]:
        """Per-student status counts over a date range."""
        if end_date < start_date:
            raise ValidationError("Tanggal akhir tidak boleh sebelum tanggal mulai")

        records = self._attendance.list_records(
            AttendanceFilter(
                kelas_id=kelas_id,
                start_date=start_date,
                end_date=end_date,
                attendance_type=attendance_type,
                limit=100000,
            )
        )
        per_student: dict[int, tuple[AttendanceRecord, StatusCounts]] = {}
        for record in records:
            _, counts = per_student.setdefault(record.siswa_id, (record, StatusCounts()))
            counts.add(record.status)

        rows = [
            {"siswa_id": siswa_id, "nama": first.nama_siswa, "nis": first.nis, "kelas": first.nama_kelas, **counts.as_dict()}
            for siswa_id, (first, counts) in per_student.items()
        ]
        rows.sort(key=lambda r: (r["kelas"] or "", r["nama"] or ""))
        return rows

    def correct(self, record_id: int, data: dict) -> AttendanceRecord:
        current = self._attendance.get_by_id(record_id)
        if not current:
            raise NotFoundError("Data absensi tidak ditemukan")

        raw = optional_str(data.get("status"))
        if not raw:
            raise ValidationError("Status harus diisi")
        status = AttendanceStatus.from_code(raw) or require_choice(raw, "Status", AttendanceStatus)
        keterangan = optional_str(data["keterangan"]) if "keterangan" in data else current.keterangan

        self._attendance.correct_status(record_id, status=status, keterangan=keterangan)
        logger.info("Attendance id=%s corrected %s -> %s", record_id, current.status.value, status.value)
        return self._attendance.get_by_id(record_id)

    def active_locations(self):
        return self._locations.list_all(active_only=True)

    @staticmethod
    def statuses() -> list[dict]:
        return [{"code": s.code, "name": s.value, "label": s.label} for s in AttendanceStatus]
