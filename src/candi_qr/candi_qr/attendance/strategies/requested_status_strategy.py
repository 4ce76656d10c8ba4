from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class RequestedStatusStrategy(AttendanceStrategy):
    """Status reported by the scanner (izin, sakit, ...) is stored as given."""

    def __init__(self, status: AttendanceStatus):
        self._status = status

    def decide_checkin(self, *, now: datetime, start: Optional[time], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=self._status, note=f"Status dari pemindai: {self._status.label}")
