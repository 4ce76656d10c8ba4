from __future__ import annotations

from datetime import date, time

import pytest

from src.candi_qr.candi_qr.attendance.model import SCHOOL_SCHEDULE_ID, AttendanceRecord
from src.candi_qr.candi_qr.core.enums import AttendanceStatus, AttendanceType
from src.candi_qr.candi_qr.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.candi_qr.candi_qr.parents.model import ParentProfile


def _record(world, siswa_id: int, day: date, status: AttendanceStatus) -> None:
    record_id = world.store.next_id()
    world.store.attendance[record_id] = AttendanceRecord(
        id=record_id,
        siswa_id=siswa_id,
        tanggal=day,
        attendance_type=AttendanceType.SCHOOL,
        jadwal_id=SCHOOL_SCHEDULE_ID,
        status=status,
        jam_masuk=time(7, 0),
    )


@pytest.fixture
def ortu(container, world):
    return container.users_repo.get_by_id(world.parent_user_id)


def test_children_lists_linked_students(container, world, ortu):
    children = container.parent_service.children(ortu)

    assert len(children) == 1
    assert children[0]["siswa_id"] == world.siswa_id
    assert children[0]["nama_siswa"] == "Siti Aminah"
    assert children[0]["nama_kelas"] == "X IPA 1"
    assert children[0]["hubungan"] == "ayah"


def test_parent_cannot_read_another_childs_attendance(container, world, ortu):
    with pytest.raises(AuthorizationError):
        container.parent_service.child_attendance(ortu, world.other_siswa_id)
    with pytest.raises(AuthorizationError):
        container.parent_service.child_stats(ortu, world.other_siswa_id)


def test_child_attendance_and_stats(container, world, ortu):
    _record(world, world.siswa_id, date(2025, 1, 6), AttendanceStatus.PRESENT)
    _record(world, world.siswa_id, date(2025, 1, 7), AttendanceStatus.LATE)
    _record(world, world.other_siswa_id, date(2025, 1, 7), AttendanceStatus.SICK)

    rows = container.parent_service.child_attendance(ortu, world.siswa_id)
    stats = container.parent_service.child_stats(ortu, world.siswa_id)

    assert [r.tanggal for r in rows] == [date(2025, 1, 7), date(2025, 1, 6)]
    assert stats["sekolah"]["total"] == 2
    assert stats["sekolah"]["terlambat"] == 1
    assert stats["sekolah"]["sakit"] == 0
    assert stats["kelas"]["total"] == 0


def test_create_parent_requires_existing_student(container):
    with pytest.raises(ValidationError):
        container.parent_service.create(
            {"username": "wali", "password": "rahasia", "full_name": "Wali", "siswa_id": 9999}
        )


def test_create_parent(container, world):
    parent = container.parent_service.create(
        {
            "username": "wali",
            "password": "rahasia",
            "full_name": "Wali Andi",
            "siswa_id": world.other_siswa_id,
            "hubungan": "wali",
        }
    )

    assert parent.nama_siswa == "Andi Wijaya"
    assert parent.hubungan == "wali"


def test_deleting_one_link_keeps_account_with_other_links(container, world):
    second = container.parents_repo.link(
        world.parent_user_id, ParentProfile(siswa_id=world.other_siswa_id, hubungan="ayah")
    )

    container.parent_service.delete(world.parent_id)
    assert container.users_repo.get_by_id(world.parent_user_id) is not None

    container.parent_service.delete(second)
    assert container.users_repo.get_by_id(world.parent_user_id) is None


def test_delete_unknown_parent(container):
    with pytest.raises(NotFoundError):
        container.parent_service.delete(9999)
