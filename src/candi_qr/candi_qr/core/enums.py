from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Peran pengguna untuk otorisasi."""

    ADMIN = "admin"
    TEACHER = "guru"
    STUDENT = "siswa"
    OPERATOR = "operator"
    PARENT = "orang_tua"


class AttendanceType(str, Enum):
    """Konteks absensi: masuk/pulang sekolah atau satu jam pelajaran."""

    SCHOOL = "sekolah"
    CLASS = "kelas"


class AttendanceStatus(str, Enum):
    """Status absensi yang disimpan di database."""

    PRESENT = "hadir"
    LATE = "terlambat"
    ABSENT = "tidak_hadir"
    EXCUSED = "izin"
    SICK = "sakit"

    @property
    def code(self) -> str:
        return _STATUS_CODES[self]

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_code(cls, code: str) -> Optional["AttendanceStatus"]:
        code = (code or "").strip().upper()
        for status, status_code in _STATUS_CODES.items():
            if status_code == code:
                return status
        return None


_STATUS_CODES = {
    AttendanceStatus.PRESENT: "H",
    AttendanceStatus.LATE: "T",
    AttendanceStatus.ABSENT: "A",
    AttendanceStatus.EXCUSED: "I",
    AttendanceStatus.SICK: "S",
}

_STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Hadir",
    AttendanceStatus.LATE: "Terlambat",
    AttendanceStatus.ABSENT: "Tidak Hadir",
    AttendanceStatus.EXCUSED: "Izin",
    AttendanceStatus.SICK: "Sakit",
}


class Weekday(str, Enum):
    """Nama hari pada jadwal pelajaran (Senin = 0)."""

    SENIN = "Senin"
    SELASA = "Selasa"
    RABU = "Rabu"
    KAMIS = "Kamis"
    JUMAT = "Jumat"
    SABTU = "Sabtu"
    MINGGU = "Minggu"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        return list(cls)[index]
