from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, AttendanceType
from .model import AttendanceFilter, AttendanceRecord, NewCheckIn


class AttendanceRepository(Protocol):
    def get_for_student(
        self, *, siswa_id: int, tanggal: date, attendance_type: AttendanceType, jadwal_id: int
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def try_create_checkin(self, checkin: NewCheckIn) -> Optional[int]:
        """Insert a check-in row.

        Returns None when the (siswa_id, tanggal, attendance_type, jadwal_id)
        key already exists, i.e. another scan got there first.
        """

        raise NotImplementedError

    def try_record_checkout(
        self,
        record_id: int,
        *,
        jam_pulang: time,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> bool:
        """Set jam_pulang only while it is still empty; False when it was already set."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def correct_status(self, record_id: int, *, status: AttendanceStatus, keterangan: Optional[str]) -> bool:
        raise NotImplementedError

    def list_records(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_status(self, flt: AttendanceFilter) -> dict:
        """Map of status value to row count for the filter."""

        raise NotImplementedError

    def count_on(self, day: date) -> int:
        raise NotImplementedError

    def count_in_month(self, day: date) -> int:
        raise NotImplementedError
