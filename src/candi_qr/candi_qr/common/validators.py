from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} harus diisi")
    return str(value).strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if value is None or isinstance(value, (dict, list)) or len(str(value)) < min_len:
        raise ValidationError(f"{field_name} minimal {min_len} karakter")
    return str(value)


TRUE_VALUES = {"1", "true", "ya", "yes", "on"}
FALSE_VALUES = {"0", "false", "tidak", "no", "off"}


def parse_bool(value: Any, field_name: str) -> bool:
    """Strict flag parsing; JSON bools, 0/1 and the usual words only."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in TRUE_VALUES:
            return True
        if v in FALSE_VALUES:
            return False
    raise ValidationError(f"{field_name} harus bernilai true atau false")


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} tidak valid")
    if number <= 0:
        raise ValidationError(f"{field_name} tidak valid")
    return number


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    return require_int(value, field_name)


def require_float(value: Any, field_name: str) -> float:
    if value is None or str(value).strip() == "":
        raise ValidationError(f"{field_name} harus diisi")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} tidak valid")


def parse_time(value: Any, field_name: str) -> time:
    """Accept HH:MM or HH:MM:SS."""
    if isinstance(value, time):
        return value
    v = require_non_empty(value, field_name)
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} tidak valid (HH:MM)")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if isinstance(value, date):
        return value
    v = optional_str(value)
    if not v:
        return None
    try:
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid (YYYY-MM-DD)")


def require_choice(value: Any, field_name: str, choices):
    """Coerce value into one of the members of an Enum class."""
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise ValidationError(f"{field_name} harus salah satu dari: {allowed}")
