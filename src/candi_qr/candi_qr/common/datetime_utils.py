from __future__ import annotations

from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def shift_time(value: time, *, minutes: int) -> time:
    """Move a wall-clock time by N minutes, clamped to the same day."""
    anchor = datetime.combine(date(2000, 1, 1), value) + timedelta(minutes=minutes)
    if anchor.date() < date(2000, 1, 1):
        return time(0, 0)
    if anchor.date() > date(2000, 1, 1):
        return time(23, 59, 59)
    return anchor.time()


def month_start(day: date) -> date:
    return day.replace(day=1)
