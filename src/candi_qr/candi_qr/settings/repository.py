from __future__ import annotations

from typing import Protocol


class SettingsRepository(Protocol):
    def get_all(self) -> dict[str, str]:
        raise NotImplementedError

    def upsert_many(self, values: dict[str, str]) -> None:
        """Write every key in one transaction."""

        raise NotImplementedError
