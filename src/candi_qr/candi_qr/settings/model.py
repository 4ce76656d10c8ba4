from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import (
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_MAX_ATTENDANCE_HOUR,
    DEFAULT_MIN_ATTENDANCE_HOUR,
    DEFAULT_SCHOOL_START,
)

DEFAULT_SCHOOL_NAME = "Candi QR"


def _int(raw: dict, key: str, default: int) -> int:
    try:
        return int(str(raw.get(key, default)).strip())
    except ValueError:
        return default


def _time(raw: dict, key: str, default: str) -> time:
    value = str(raw.get(key) or default).strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return datetime.strptime(default, "%H:%M").time()


@dataclass(frozen=True)
class SchoolSettings:
    """Typed view over the key/value system_config table.

    Missing or unreadable values fall back to the defaults.
    """

    school_name: str = DEFAULT_SCHOOL_NAME
    school_start_time: time = time(7, 0)
    late_threshold_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    min_attendance_hour: int = DEFAULT_MIN_ATTENDANCE_HOUR
    max_attendance_hour: int = DEFAULT_MAX_ATTENDANCE_HOUR

    @classmethod
    def from_mapping(cls, raw: dict) -> "SchoolSettings":
        return cls(
            school_name=str(raw.get("school_name") or DEFAULT_SCHOOL_NAME),
            school_start_time=_time(raw, "school_start_time", DEFAULT_SCHOOL_START),
            late_threshold_minutes=_int(raw, "late_threshold_minutes", DEFAULT_LATE_GRACE_MINUTES),
            min_attendance_hour=_int(raw, "min_attendance_hour", DEFAULT_MIN_ATTENDANCE_HOUR),
            max_attendance_hour=_int(raw, "max_attendance_hour", DEFAULT_MAX_ATTENDANCE_HOUR),
        )

    def to_mapping(self) -> dict[str, str]:
        return {
            "school_name": self.school_name,
            "school_start_time": self.school_start_time.strftime("%H:%M"),
            "late_threshold_minutes": str(self.late_threshold_minutes),
            "min_attendance_hour": str(self.min_attendance_hour),
            "max_attendance_hour": str(self.max_attendance_hour),
        }


SETTING_KEYS = tuple(SchoolSettings().to_mapping().keys())
