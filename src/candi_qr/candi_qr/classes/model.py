from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Entitas domain: Kelas, dengan nama wali kelas dan jumlah siswa."""

    id: int
    nama_kelas: str
    tingkat: Optional[str] = None
    jurusan: Optional[str] = None
    tahun_ajaran: Optional[str] = None
    wali_kelas_id: Optional[int] = None
    wali_kelas_nama: Optional[str] = None
    jumlah_siswa: int = 0


@dataclass(frozen=True)
class ClassFields:
    nama_kelas: str
    tingkat: Optional[str] = None
    jurusan: Optional[str] = None
    tahun_ajaran: Optional[str] = None
    wali_kelas_id: Optional[int] = None
