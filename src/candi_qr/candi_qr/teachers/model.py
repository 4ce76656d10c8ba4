from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TeacherProfile:
    nip: str
    mata_pelajaran_id: Optional[int] = None
    jenis_kelamin: Optional[str] = None
    alamat: Optional[str] = None
    tanggal_lahir: Optional[date] = None


@dataclass(frozen=True)
class Teacher:
    """Entitas domain: Guru."""

    id: int
    user_id: int
    nip: str
    full_name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    mata_pelajaran_id: Optional[int] = None
    nama_pelajaran: Optional[str] = None
    jenis_kelamin: Optional[str] = None
    alamat: Optional[str] = None
    tanggal_lahir: Optional[date] = None
