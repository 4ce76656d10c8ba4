from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import Schedule, ScheduleFields


class ScheduleRepository(Protocol):
    def list_all(
        self,
        *,
        kelas_id: Optional[int] = None,
        guru_id: Optional[int] = None,
        mata_pelajaran_id: Optional[int] = None,
        hari: Optional[Weekday] = None,
        search: Optional[str] = None,
    ) -> Sequence[Schedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def has_overlap(
        self,
        *,
        kelas_id: int,
        guru_id: int,
        hari: Weekday,
        jam_mulai: time,
        jam_selesai: time,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """True when the class or the teacher already has a lesson overlapping that slot."""

        raise NotImplementedError

    def create(self, fields: ScheduleFields) -> int:
        raise NotImplementedError

    def update(self, schedule_id: int, fields: ScheduleFields) -> bool:
        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError

    def count_for_subject(self, subject_id: int) -> int:
        raise NotImplementedError

    def class_ids_for_teacher(self, guru_id: int) -> Sequence[int]:
        raise NotImplementedError
