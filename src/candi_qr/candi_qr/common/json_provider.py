from __future__ import annotations

import dataclasses
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from flask.json.provider import DefaultJSONProvider

from ..database.mysql_base import normalize_mysql_time


def _to_plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, timedelta):
        return normalize_mysql_time(value).strftime("%H:%M:%S")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    return value


class CandiJSONProvider(DefaultJSONProvider):
    """ISO dates, HH:MM:SS times and enum values instead of Flask's HTTP-date defaults."""

    @staticmethod
    def default(o: Any) -> Any:
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return {f.name: _to_plain(getattr(o, f.name)) for f in dataclasses.fields(o)}
        plain = _to_plain(o)
        if plain is not o:
            return plain
        return DefaultJSONProvider.default(o)
