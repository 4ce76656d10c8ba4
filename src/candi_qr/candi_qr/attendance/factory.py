from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.requested_status_strategy import RequestedStatusStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(
        self,
        *,
        now: datetime,
        start: Optional[time],
        grace_minutes: int,
        requested: Optional[AttendanceStatus] = None,
    ) -> AttendanceStrategy:
        if requested is not None and requested != AttendanceStatus.PRESENT:
            return RequestedStatusStrategy(requested)
        if start is None:
            return OnTimeStrategy()

        deadline = datetime.combine(now.date(), start) + timedelta(minutes=grace_minutes)
        if now <= deadline:
            return OnTimeStrategy()
        return LateStrategy()
