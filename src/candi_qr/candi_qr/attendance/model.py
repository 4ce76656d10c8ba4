from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, AttendanceType

# jadwal_id stored for school-context rows, so the unique key also covers them.
SCHOOL_SCHEDULE_ID = 0


@dataclass(frozen=True)
class AttendanceRecord:
    """Entitas domain: satu baris absensi (masuk/pulang) siswa pada satu konteks dan tanggal."""

    id: int
    siswa_id: int
    tanggal: date
    attendance_type: AttendanceType
    jadwal_id: int
    status: AttendanceStatus
    jam_masuk: Optional[time] = None
    jam_pulang: Optional[time] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    latitude_pulang: Optional[float] = None
    longitude_pulang: Optional[float] = None
    keterangan: Optional[str] = None
    nama_siswa: Optional[str] = None
    nis: Optional[str] = None
    nama_kelas: Optional[str] = None
    nama_pelajaran: Optional[str] = None


@dataclass(frozen=True)
class NewCheckIn:
    siswa_id: int
    tanggal: date
    attendance_type: AttendanceType
    jadwal_id: int
    jam_masuk: time
    status: AttendanceStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    keterangan: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    siswa_id: Optional[int] = None
    kelas_id: Optional[int] = None
    kelas_ids: Optional[Sequence[int]] = None
    tanggal: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    attendance_type: Optional[AttendanceType] = None
    limit: int = 500


@dataclass
class StatusCounts:
    total: int = 0
    counts: dict = field(default_factory=lambda: {s.value: 0 for s in AttendanceStatus})

    def add(self, status: AttendanceStatus, n: int = 1) -> None:
        self.counts[status.value] = self.counts.get(status.value, 0) + n
        self.total += n

    def as_dict(self) -> dict:
        return {"total": self.total, **self.counts}


def status_breakdown(counts: dict) -> dict:
    """Counts for every status (zero-filled) plus the total."""
    out = {s.value: int(counts.get(s.value, 0)) for s in AttendanceStatus}
    out["total"] = sum(out.values())
    return out
