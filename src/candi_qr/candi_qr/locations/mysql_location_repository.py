from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Location, LocationFields
from .repository import LocationRepository

_COLUMNS = "id, name, latitude, longitude, radius, is_active, description"


def row_to_location(r: dict) -> Location:
    return Location(
        id=int(r["id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius=float(r["radius"]),
        is_active=bool(r.get("is_active", True)),
        description=r.get("description"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, active_only: bool = False) -> Sequence[Location]:
        where = "WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_locations {where} ORDER BY name ASC")
            return [row_to_location(r) for r in fetchall(cur)]

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_locations WHERE id=%s", (int(location_id),))
            row = fetchone(cur)
            return row_to_location(row) if row else None

    def create(self, fields: LocationFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_locations(name, latitude, longitude, radius, is_active, description)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (fields.name, fields.latitude, fields.longitude, fields.radius, int(fields.is_active), fields.description),
            )
            return int(cur.lastrowid)

    def update(self, location_id: int, fields: LocationFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_locations
                SET name=%s, latitude=%s, longitude=%s, radius=%s, is_active=%s, description=%s
                WHERE id=%s
                """,
                (
                    fields.name,
                    fields.latitude,
                    fields.longitude,
                    fields.radius,
                    int(fields.is_active),
                    fields.description,
                    int(location_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_locations WHERE id=%s", (int(location_id),))
            return cur.rowcount > 0
