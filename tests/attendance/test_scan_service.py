from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time

import pytest

from src.candi_qr.candi_qr.attendance.service import ACTION_CHECK_IN, ACTION_CHECK_OUT, ScanRequest
from src.candi_qr.candi_qr.core.enums import AttendanceStatus, AttendanceType, Weekday
from src.candi_qr.candi_qr.core.exceptions import (
    DuplicateScanError,
    OutsideGeofenceError,
    ScheduleNotActiveError,
    UnknownBarcodeError,
    ValidationError,
)

from tests.fakes import SCHOOL_LAT, SCHOOL_LON, InMemoryAttendance, build_fake_container, schedule_fields

MONDAY = datetime(2025, 1, 6)


def at(hour: int, minute: int = 0, day: datetime = MONDAY) -> datetime:
    return day.replace(hour=hour, minute=minute)


def school_scan(barcode: str = "BC1001") -> ScanRequest:
    return ScanRequest.from_payload({"barcode_id": barcode, "attendance_type": "sekolah"})


def geo_scan(lat: float, lon: float, status_code: str = "H") -> ScanRequest:
    return ScanRequest.from_payload(
        {
            "barcode_id": "BC1001",
            "attendance_type": "sekolah",
            "latitude": lat,
            "longitude": lon,
            "status_code": status_code,
        },
        geolocated=True,
    )


def test_three_scans_check_in_then_out_then_duplicate(container):
    service = container.attendance_service

    first = service.scan(school_scan(), now=at(7, 5))
    assert first.action == ACTION_CHECK_IN
    assert first.record.status == AttendanceStatus.PRESENT
    assert first.record.jam_masuk == time(7, 5)
    assert first.message == "Absensi masuk berhasil. Status: Hadir"

    second = service.scan(school_scan(), now=at(14, 0))
    assert second.action == ACTION_CHECK_OUT
    assert second.record.id == first.record.id
    assert second.record.jam_pulang == time(14, 0)

    with pytest.raises(DuplicateScanError):
        service.scan(school_scan(), now=at(14, 5))


def test_checkin_after_grace_is_late(container):
    result = container.attendance_service.scan(school_scan(), now=at(7, 16))

    assert result.record.status == AttendanceStatus.LATE


def test_school_start_time_comes_from_settings(world, container):
    world.store.config["school_start_time"] = "08:00"

    result = container.attendance_service.scan(school_scan(), now=at(8, 10))

    assert result.record.status == AttendanceStatus.PRESENT


def test_new_day_starts_a_new_record(container):
    service = container.attendance_service
    service.scan(school_scan(), now=at(7, 0))
    service.scan(school_scan(), now=at(14, 0))

    tuesday = service.scan(school_scan(), now=at(7, 0, day=datetime(2025, 1, 7)))

    assert tuesday.action == ACTION_CHECK_IN


def test_unknown_barcode_is_rejected(container):
    with pytest.raises(UnknownBarcodeError):
        container.attendance_service.scan(school_scan("NOPE"), now=at(7, 0))


def test_geolocated_scan_inside_radius_checks_in(container):
    result = container.attendance_service.scan(geo_scan(SCHOOL_LAT + 0.0003, SCHOOL_LON), now=at(7, 0))

    assert result.action == ACTION_CHECK_IN
    assert result.record.latitude == pytest.approx(SCHOOL_LAT + 0.0003)


def test_geolocated_scan_outside_every_location_is_rejected(world, container):
    # about 1.1 km north of the only registered location
    with pytest.raises(OutsideGeofenceError):
        container.attendance_service.scan(geo_scan(SCHOOL_LAT + 0.01, SCHOOL_LON), now=at(7, 0))

    assert world.store.attendance == {}


def test_geolocated_scan_ignores_inactive_locations(world, container):
    loc = world.store.locations[world.location_id]
    world.store.locations[world.location_id] = replace(loc, is_active=False)

    with pytest.raises(OutsideGeofenceError):
        container.attendance_service.scan(geo_scan(SCHOOL_LAT, SCHOOL_LON), now=at(7, 0))


def test_geolocated_scan_outside_attendance_hours(container):
    with pytest.raises(ScheduleNotActiveError):
        container.attendance_service.scan(geo_scan(SCHOOL_LAT, SCHOOL_LON), now=at(4, 30))


def test_geolocated_scan_stores_requested_status(container):
    result = container.attendance_service.scan(geo_scan(SCHOOL_LAT, SCHOOL_LON, status_code="s"), now=at(9, 0))

    assert result.record.status == AttendanceStatus.SICK
    assert result.record.keterangan == "Status dari pemindai: Sakit"


def test_geolocated_payload_requires_coordinates():
    with pytest.raises(ValidationError):
        ScanRequest.from_payload({"barcode_id": "BC1001", "attendance_type": "sekolah"}, geolocated=True)


def test_geolocated_payload_rejects_unknown_status_code():
    with pytest.raises(ValidationError):
        ScanRequest.from_payload(
            {"barcode_id": "BC1001", "attendance_type": "sekolah", "latitude": 1, "longitude": 1, "status_code": "X"},
            geolocated=True,
        )


def test_class_scan_requires_schedule_id():
    with pytest.raises(ValidationError):
        ScanRequest.from_payload({"barcode_id": "BC1001", "attendance_type": "kelas"})


@pytest.fixture
def lesson_id(world):
    schedule_id = world.store.next_id()
    world.store.schedules[schedule_id] = schedule_fields(
        world.kelas_id, world.subject_id, world.guru_id, Weekday.SENIN, time(8, 0), time(9, 30)
    )
    return schedule_id


def class_scan(jadwal_id: int, barcode: str = "BC1001") -> ScanRequest:
    return ScanRequest.from_payload({"barcode_id": barcode, "attendance_type": "kelas", "jadwal_id": jadwal_id})


def test_class_scan_opens_thirty_minutes_before_lesson(container, lesson_id):
    result = container.attendance_service.scan(class_scan(lesson_id), now=at(7, 30))

    assert result.action == ACTION_CHECK_IN
    assert result.record.attendance_type == AttendanceType.CLASS
    assert result.record.jadwal_id == lesson_id
    assert result.as_dict()["pelajaran"]["mata_pelajaran"] == "Matematika"


def test_class_scan_before_window_is_rejected(container, lesson_id):
    with pytest.raises(ScheduleNotActiveError):
        container.attendance_service.scan(class_scan(lesson_id), now=at(7, 29))


def test_class_scan_after_lesson_is_rejected(container, lesson_id):
    with pytest.raises(ScheduleNotActiveError):
        container.attendance_service.scan(class_scan(lesson_id), now=at(9, 31))


def test_class_scan_on_another_weekday_is_rejected(container, lesson_id):
    with pytest.raises(ScheduleNotActiveError):
        container.attendance_service.scan(class_scan(lesson_id), now=at(8, 0, day=datetime(2025, 1, 7)))


def test_class_scan_for_student_of_other_class_is_rejected(container, lesson_id):
    with pytest.raises(ValidationError):
        container.attendance_service.scan(class_scan(lesson_id, barcode="BC2001"), now=at(8, 0))


def test_class_scan_late_is_measured_from_lesson_start(container, lesson_id):
    result = container.attendance_service.scan(class_scan(lesson_id), now=at(8, 20))

    assert result.record.status == AttendanceStatus.LATE


def test_school_and_class_contexts_are_independent(container, lesson_id):
    service = container.attendance_service

    service.scan(school_scan(), now=at(7, 0))
    lesson = service.scan(class_scan(lesson_id), now=at(8, 0))

    assert lesson.action == ACTION_CHECK_IN


class RacingAttendance(InMemoryAttendance):
    """Another scan inserts the row between our lookup and our insert."""

    def __init__(self, store):
        super().__init__(store)
        self.raced = False

    def get_for_student(self, **kwargs):
        if not self.raced:
            return None
        return super().get_for_student(**kwargs)

    def try_create_checkin(self, checkin):
        if not self.raced:
            self.raced = True
            super().try_create_checkin(checkin)
        return None


def test_lost_checkin_race_falls_through_to_checkout(world):
    service = build_fake_container(world.store, attendance=RacingAttendance(world.store)).attendance_service

    result = service.scan(school_scan(), now=at(7, 0))

    assert result.action == ACTION_CHECK_OUT
    assert len(world.store.attendance) == 1
