from __future__ import annotations

from dataclasses import dataclass

import pytest
from werkzeug.security import generate_password_hash

from src.candi_qr.candi_qr.classes.model import ClassFields
from src.candi_qr.candi_qr.core.enums import Role
from src.candi_qr.candi_qr.locations.model import Location
from src.candi_qr.candi_qr.main import create_app
from src.candi_qr.candi_qr.parents.model import ParentProfile
from src.candi_qr.candi_qr.students.model import StudentProfile
from src.candi_qr.candi_qr.subjects.model import Subject
from src.candi_qr.candi_qr.teachers.model import TeacherProfile
from src.candi_qr.candi_qr.users.model import NewAccount

from tests.fakes import SCHOOL_LAT, SCHOOL_LON, Store, build_fake_container

PASSWORD = "password"
# pbkdf2 keeps the suite fast; login accepts any werkzeug hash format
_HASH = generate_password_hash(PASSWORD, method="pbkdf2:sha256:1000")


@dataclass
class World:
    store: Store
    admin_id: int
    operator_id: int
    kelas_id: int
    other_kelas_id: int
    subject_id: int
    guru_id: int
    guru_user_id: int
    siswa_id: int
    siswa_user_id: int
    other_siswa_id: int
    parent_id: int
    parent_user_id: int
    location_id: int


def _account(username: str, full_name: str) -> NewAccount:
    return NewAccount(username=username, email=f"{username}@candi.sch.id", password_hash=_HASH, full_name=full_name)


def seed_world() -> World:
    store = Store()
    admin_id = store.add_user(_account("admin", "Administrator"), Role.ADMIN)
    operator_id = store.add_user(_account("operator", "Operator TU"), Role.OPERATOR)

    kelas_id = store.next_id()
    store.classes[kelas_id] = ClassFields(nama_kelas="X IPA 1", tingkat="X", jurusan="IPA", tahun_ajaran="2025/2026")
    other_kelas_id = store.next_id()
    store.classes[other_kelas_id] = ClassFields(nama_kelas="XI IPS 2", tingkat="XI", jurusan="IPS")

    subject_id = store.next_id()
    store.subjects[subject_id] = Subject(subject_id, "Matematika", "MTK", None)

    guru_user_id = store.add_user(_account("guru", "Budi Santoso"), Role.TEACHER)
    guru_id = store.next_id()
    store.teachers[guru_id] = (guru_user_id, TeacherProfile(nip="198001012005011001", mata_pelajaran_id=subject_id))

    siswa_user_id = store.add_user(_account("siswa", "Siti Aminah"), Role.STUDENT)
    siswa_id = store.next_id()
    store.students[siswa_id] = (siswa_user_id, StudentProfile(nis="1001", kelas_id=kelas_id, barcode_id="BC1001"))

    other_user_id = store.add_user(_account("siswa2", "Andi Wijaya"), Role.STUDENT)
    other_siswa_id = store.next_id()
    store.students[other_siswa_id] = (other_user_id, StudentProfile(nis="2001", kelas_id=other_kelas_id, barcode_id="BC2001"))

    parent_user_id = store.add_user(_account("ortu", "Ahmad Aminah"), Role.PARENT)
    parent_id = store.next_id()
    store.parents[parent_id] = (parent_user_id, ParentProfile(siswa_id=siswa_id, hubungan="ayah"))

    location_id = store.next_id()
    store.locations[location_id] = Location(
        id=location_id, name="Gedung Utama", latitude=SCHOOL_LAT, longitude=SCHOOL_LON, radius=100
    )

    return World(
        store=store,
        admin_id=admin_id,
        operator_id=operator_id,
        kelas_id=kelas_id,
        other_kelas_id=other_kelas_id,
        subject_id=subject_id,
        guru_id=guru_id,
        guru_user_id=guru_user_id,
        siswa_id=siswa_id,
        siswa_user_id=siswa_user_id,
        other_siswa_id=other_siswa_id,
        parent_id=parent_id,
        parent_user_id=parent_user_id,
        location_id=location_id,
    )


@pytest.fixture
def world() -> World:
    return seed_world()


@pytest.fixture
def container(world):
    return build_fake_container(world.store)


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(container, world):
    """Bearer header for one of the seeded users, by username."""

    def _headers(username: str) -> dict:
        user = container.users_repo.get_by_login(username)
        return {"Authorization": f"Bearer {container.tokens.issue(user)}"}

    return _headers
