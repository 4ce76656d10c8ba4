from __future__ import annotations

import logging

from ..common.validators import parse_time, require_non_empty
from ..core.exceptions import ValidationError
from .model import SETTING_KEYS, SchoolSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def _hour(value, field_name: str) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} tidak valid")
    if not 0 <= hour <= 23:
        raise ValidationError(f"{field_name} harus antara 0 dan 23")
    return hour


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> SchoolSettings:
        return SchoolSettings.from_mapping(self._settings.get_all())

    def update(self, data: dict) -> SchoolSettings:
        unknown = sorted(set(data) - set(SETTING_KEYS))
        if unknown:
            raise ValidationError(f"Pengaturan tidak dikenal: {', '.join(unknown)}")
        if not data:
            raise ValidationError("Tidak ada data yang diupdate")

        current = self.current()
        merged = SchoolSettings(
            school_name=require_non_empty(data.get("school_name", current.school_name), "Nama sekolah"),
            school_start_time=parse_time(data.get("school_start_time", current.school_start_time), "Jam masuk"),
            late_threshold_minutes=self._minutes(data.get("late_threshold_minutes", current.late_threshold_minutes)),
            min_attendance_hour=_hour(data.get("min_attendance_hour", current.min_attendance_hour), "Jam minimal"),
            max_attendance_hour=_hour(data.get("max_attendance_hour", current.max_attendance_hour), "Jam maksimal"),
        )
        if merged.min_attendance_hour > merged.max_attendance_hour:
            raise ValidationError("Jam minimal tidak boleh melebihi jam maksimal")

        self._settings.upsert_many(merged.to_mapping())
        logger.info("School settings updated: %s", ", ".join(sorted(data)))
        return merged

    def reset(self) -> SchoolSettings:
        defaults = SchoolSettings()
        self._settings.upsert_many(defaults.to_mapping())
        return defaults

    @staticmethod
    def _minutes(value) -> int:
        try:
            minutes = int(value)
        except (TypeError, ValueError):
            raise ValidationError("Batas terlambat tidak valid")
        if minutes < 0:
            raise ValidationError("Batas terlambat tidak boleh negatif")
        return minutes
