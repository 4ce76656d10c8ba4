from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StudentProfile:
    nis: str
    kelas_id: int
    barcode_id: str
    nisn: Optional[str] = None
    jenis_kelamin: Optional[str] = None
    alamat: Optional[str] = None
    tanggal_lahir: Optional[date] = None
    nama_ortu: Optional[str] = None
    phone_ortu: Optional[str] = None


@dataclass(frozen=True)
class Student:
    """Entitas domain: Siswa, digabung dengan data akun dan kelasnya."""

    id: int
    user_id: int
    nis: str
    kelas_id: int
    barcode_id: str
    full_name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    nisn: Optional[str] = None
    jenis_kelamin: Optional[str] = None
    alamat: Optional[str] = None
    tanggal_lahir: Optional[date] = None
    nama_ortu: Optional[str] = None
    phone_ortu: Optional[str] = None
    nama_kelas: Optional[str] = None

    def summary(self) -> dict:
        return {"id": self.id, "nama": self.full_name, "nis": self.nis, "kelas": self.nama_kelas}
