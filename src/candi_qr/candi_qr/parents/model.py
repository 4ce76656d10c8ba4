from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParentProfile:
    siswa_id: int
    hubungan: Optional[str] = None
    pekerjaan: Optional[str] = None
    alamat: Optional[str] = None


@dataclass(frozen=True)
class Parent:
    """Entitas domain: Orang tua / wali, satu baris per anak."""

    id: int
    user_id: int
    siswa_id: int
    full_name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    hubungan: Optional[str] = None
    pekerjaan: Optional[str] = None
    alamat: Optional[str] = None
    nama_siswa: Optional[str] = None
