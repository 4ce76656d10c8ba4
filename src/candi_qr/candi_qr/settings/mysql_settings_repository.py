from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_all(self) -> dict[str, str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT config_key, config_value FROM system_config ORDER BY id ASC")
            return {r["config_key"]: r["config_value"] for r in fetchall(cur)}

    def upsert_many(self, values: dict[str, str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for key, value in values.items():
                cur.execute(
                    """
                    INSERT INTO system_config(config_key, config_value)
                    VALUES(%s,%s)
                    ON DUPLICATE KEY UPDATE config_value=VALUES(config_value)
                    """,
                    (key, value),
                )
