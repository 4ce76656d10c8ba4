from __future__ import annotations

from datetime import date, time

import pytest

from src.candi_qr.candi_qr.attendance.model import SCHOOL_SCHEDULE_ID, AttendanceRecord
from src.candi_qr.candi_qr.core.enums import AttendanceStatus, AttendanceType, Weekday
from src.candi_qr.candi_qr.core.exceptions import NotFoundError, ValidationError

from tests.fakes import schedule_fields

MONDAY = date(2025, 1, 6)


@pytest.fixture
def lesson_id(world):
    schedule_id = world.store.next_id()
    world.store.schedules[schedule_id] = schedule_fields(
        world.kelas_id, world.subject_id, world.guru_id, Weekday.SENIN, time(8, 0), time(9, 30)
    )
    return schedule_id


def _add(world, siswa_id, day, status, *, kind=AttendanceType.SCHOOL, jadwal_id=SCHOOL_SCHEDULE_ID, **extra):
    record_id = world.store.next_id()
    world.store.attendance[record_id] = AttendanceRecord(
        id=record_id,
        siswa_id=siswa_id,
        tanggal=day,
        attendance_type=kind,
        jadwal_id=jadwal_id,
        status=status,
        jam_masuk=time(7, 5),
        **extra,
    )
    return record_id


def test_admin_dashboard(container, world):
    _add(world, world.siswa_id, MONDAY, AttendanceStatus.PRESENT)
    _add(world, world.other_siswa_id, MONDAY, AttendanceStatus.LATE)
    admin = container.users_repo.get_by_id(world.admin_id)

    data = container.report_service.dashboard(admin, today=MONDAY)

    assert data["total_siswa"] == 2
    assert data["absensi_hari_ini"] == 2
    assert data["siswa_terlambat"] == 1
    assert data["status_hari_ini"]["hadir"] == 1
    assert data["status_hari_ini"]["total"] == 2


def test_teacher_dashboard_shows_todays_lessons(container, world, lesson_id):
    _add(world, world.siswa_id, MONDAY, AttendanceStatus.PRESENT, kind=AttendanceType.CLASS, jadwal_id=lesson_id)
    _add(world, world.other_siswa_id, MONDAY, AttendanceStatus.PRESENT, kind=AttendanceType.CLASS, jadwal_id=lesson_id)
    guru = container.users_repo.get_by_id(world.guru_user_id)

    data = container.report_service.dashboard(guru, today=MONDAY)

    assert [s.id for s in data["jadwal_hari_ini"]] == [lesson_id]
    # the other student's class is not taught by this teacher
    assert data["absensi_kelas_hari_ini"]["total"] == 1
    assert container.report_service.dashboard(guru, today=date(2025, 1, 7))["jadwal_hari_ini"] == []


def test_teacher_dashboard_without_profile(container, world):
    world.store.teachers.clear()
    guru = container.users_repo.get_by_id(world.guru_user_id)

    with pytest.raises(NotFoundError):
        container.report_service.dashboard(guru, today=MONDAY)


def test_stats_over_range(container, world):
    _add(world, world.siswa_id, MONDAY, AttendanceStatus.PRESENT)
    _add(world, world.siswa_id, date(2025, 1, 7), AttendanceStatus.SICK)
    _add(world, world.siswa_id, date(2025, 2, 3), AttendanceStatus.PRESENT)

    stats = container.report_service.stats(start_date=MONDAY, end_date=date(2025, 1, 31))

    assert stats["status"]["total"] == 2
    assert stats["status"]["sakit"] == 1
    assert stats["periode"] == {"start_date": MONDAY, "end_date": date(2025, 1, 31)}


def test_stats_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.report_service.stats(start_date=date(2025, 2, 1), end_date=date(2025, 1, 1))


def test_export_rows(container, world, lesson_id):
    _add(world, world.siswa_id, MONDAY, AttendanceStatus.LATE, jam_pulang=time(14, 0), keterangan="macet")
    _add(world, world.siswa_id, MONDAY, AttendanceStatus.PRESENT, kind=AttendanceType.CLASS, jadwal_id=lesson_id)

    export = container.report_service.export_rows(
        start_date=MONDAY, end_date=MONDAY, attendance_type=AttendanceType.SCHOOL
    )

    assert export.rows == [
        {
            "tanggal": "2025-01-06",
            "nis": "1001",
            "nama_siswa": "Siti Aminah",
            "nama_kelas": "X IPA 1",
            "attendance_type": "sekolah",
            "nama_pelajaran": "",
            "jam_masuk": "07:05:00",
            "jam_pulang": "14:00:00",
            "status": "Terlambat",
            "keterangan": "macet",
        }
    ]

    both = container.report_service.export_rows(start_date=MONDAY, end_date=MONDAY)
    assert {row["nama_pelajaran"] for row in both.rows} == {"", "Matematika"}
