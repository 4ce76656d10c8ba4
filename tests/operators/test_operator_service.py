from __future__ import annotations

from datetime import date, time

import pytest

from src.candi_qr.candi_qr.attendance.model import SCHOOL_SCHEDULE_ID, AttendanceRecord
from src.candi_qr.candi_qr.core.enums import AttendanceStatus, AttendanceType, Role
from src.candi_qr.candi_qr.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_school_data_counts(container, world):
    for day in (date(2025, 1, 6), date(2025, 1, 20), date(2024, 12, 30)):
        record_id = world.store.next_id()
        world.store.attendance[record_id] = AttendanceRecord(
            id=record_id,
            siswa_id=world.siswa_id,
            tanggal=day,
            attendance_type=AttendanceType.SCHOOL,
            jadwal_id=SCHOOL_SCHEDULE_ID,
            status=AttendanceStatus.PRESENT,
            jam_masuk=time(7, 0),
        )

    data = container.operator_service.school_data(today=date(2025, 1, 20))

    assert data == {
        "total_siswa": 2,
        "total_guru": 1,
        "total_kelas": 2,
        "total_orang_tua": 1,
        "absensi_hari_ini": 1,
        "absensi_bulan_ini": 2,
    }


def test_list_users_paginates(container):
    page = container.operator_service.list_users(page=2, limit=3)

    assert page["pagination"] == {"page": 2, "limit": 3, "total": 6, "totalPages": 2}
    assert len(page["users"]) == 3
    assert all("password_hash" not in u for u in page["users"])


def test_list_users_filters_by_role_and_search(container):
    students = container.operator_service.list_users(role="siswa")
    assert {u["username"] for u in students["users"]} == {"siswa", "siswa2"}

    found = container.operator_service.list_users(search="budi")
    assert [u["username"] for u in found["users"]] == ["guru"]

    with pytest.raises(ValidationError):
        container.operator_service.list_users(role="kepala_sekolah")


def test_bulk_create_reports_each_row(container, world):
    result = container.operator_service.bulk_create(
        [
            {
                "username": "dewi",
                "password": "rahasia",
                "role": "siswa",
                "full_name": "Dewi Lestari",
                "additional_data": {"nis": "3001", "kelas_id": world.kelas_id},
            },
            {
                "username": "rudi",
                "password": "rahasia",
                "role": "guru",
                "full_name": "Rudi Hartono",
                "additional_data": {"nip": "1985"},
            },
            {"username": "tu2", "password": "rahasia", "role": "operator", "full_name": "Operator Dua"},
            {"username": "admin", "password": "rahasia", "role": "admin", "full_name": "Dupe"},
            {"username": "tanpa_password", "role": "siswa", "full_name": "X"},
            {
                "username": "nyasar",
                "password": "rahasia",
                "role": "siswa",
                "full_name": "Nyasar",
                "additional_data": {"nis": "3002", "kelas_id": 9999},
            },
        ]
    )

    assert [row["username"] for row in result["success"]] == ["dewi", "rudi"]
    assert all(row["user_id"] for row in result["success"])
    assert [e["username"] for e in result["errors"]] == ["tu2", "admin", "tanpa_password", "nyasar"]
    assert result["errors"][2]["error"] == "Field wajib tidak lengkap"
    assert container.student_service.list_all(search="Dewi")[0].nis == "3001"
    assert container.users_repo.get_by_login("nyasar") is None


@pytest.mark.parametrize("role", ["admin", "operator"])
def test_bulk_create_cannot_make_staff_accounts(container, role):
    result = container.operator_service.bulk_create(
        [{"username": "evil", "password": "rahasia", "role": role, "full_name": "Evil"}]
    )

    assert result["success"] == []
    assert result["errors"] == [
        {"username": "evil", "error": "Role harus salah satu dari: siswa, guru, orang_tua"}
    ]
    assert container.users_repo.get_by_login("evil") is None


def test_bulk_create_checks_profile_references(container, world):
    result = container.operator_service.bulk_create(
        [
            {
                "username": "g9",
                "password": "rahasia",
                "role": "guru",
                "full_name": "Guru Sembilan",
                "additional_data": {"nip": "N9", "mata_pelajaran_id": 99999},
            },
            {
                "username": "g10",
                "password": "rahasia",
                "role": "guru",
                "full_name": "Guru Sepuluh",
                "additional_data": {"nip": "198001012005011001"},
            },
            {
                "username": "kembar",
                "password": "rahasia",
                "role": "siswa",
                "full_name": "Kembar",
                "additional_data": {"nis": "1001", "kelas_id": world.kelas_id},
            },
            {
                "username": "g11",
                "password": "rahasia",
                "role": "guru",
                "full_name": "Guru Sebelas",
                "additional_data": {"nip": "N11", "mata_pelajaran_id": world.subject_id},
            },
        ]
    )

    assert [row["username"] for row in result["success"]] == ["g11"]
    assert [(e["username"], e["error"]) for e in result["errors"]] == [
        ("g9", "Mata pelajaran tidak ditemukan"),
        ("g10", "NIP sudah digunakan"),
        ("kembar", "NIS atau barcode sudah digunakan"),
    ]
    assert container.users_repo.get_by_login("g9") is None
    assert container.teacher_service.list_all(search="Sebelas")[0].mata_pelajaran_id == world.subject_id


def test_bulk_create_rejects_empty_batch(container):
    with pytest.raises(ValidationError):
        container.operator_service.bulk_create([])
    with pytest.raises(ValidationError):
        container.operator_service.bulk_create({"username": "x"})


def test_operator_crud(container, world):
    service = container.operator_service

    created = service.create_operator(
        {"username": "tu2", "password": "rahasia", "full_name": "Operator Dua", "email": "tu2@candi.sch.id"}
    )
    assert created["role"] == Role.OPERATOR.value
    assert {o["username"] for o in service.list_operators()} == {"operator", "tu2"}

    updated = service.update_operator(created["id"], {"phone": "0813"})
    assert updated["phone"] == "0813"

    with pytest.raises(ConflictError):
        service.update_operator(created["id"], {"username": "admin"})
    with pytest.raises(ValidationError):
        service.update_operator(created["id"], {})

    service.delete_operator(created["id"])
    with pytest.raises(NotFoundError):
        service.get_operator(created["id"])


def test_non_operator_account_is_not_an_operator(container, world):
    with pytest.raises(NotFoundError):
        container.operator_service.get_operator(world.admin_id)
    with pytest.raises(NotFoundError):
        container.operator_service.delete_operator(world.guru_user_id)
