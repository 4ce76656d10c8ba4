from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import Weekday


@dataclass(frozen=True)
class ScheduleFields:
    kelas_id: int
    mata_pelajaran_id: int
    guru_id: int
    hari: Weekday
    jam_mulai: time
    jam_selesai: time
    ruang: Optional[str] = None
    semester: Optional[str] = None
    tahun_ajaran: Optional[str] = None


@dataclass(frozen=True)
class Schedule:
    """Entitas domain: Jadwal pelajaran satu kelas pada satu hari."""

    id: int
    kelas_id: int
    mata_pelajaran_id: int
    guru_id: int
    hari: Weekday
    jam_mulai: time
    jam_selesai: time
    ruang: Optional[str] = None
    semester: Optional[str] = None
    tahun_ajaran: Optional[str] = None
    nama_kelas: Optional[str] = None
    nama_pelajaran: Optional[str] = None
    nama_guru: Optional[str] = None

    def lesson(self) -> dict:
        return {
            "id": self.id,
            "mata_pelajaran": self.nama_pelajaran,
            "guru": self.nama_guru,
            "jam_mulai": self.jam_mulai.strftime("%H:%M:%S"),
            "jam_selesai": self.jam_selesai.strftime("%H:%M:%S"),
            "ruang": self.ruang,
        }
