from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like, normalize_mysql_time
from .model import Schedule, ScheduleFields
from .repository import ScheduleRepository

_SELECT = """
    SELECT
        j.id, j.kelas_id, j.mata_pelajaran_id, j.guru_id, j.hari, j.jam_mulai, j.jam_selesai,
        j.ruang, j.semester, j.tahun_ajaran,
        k.nama_kelas, mp.nama_pelajaran, u.full_name AS nama_guru
    FROM jadwal j
    JOIN kelas k ON k.id = j.kelas_id
    JOIN mata_pelajaran mp ON mp.id = j.mata_pelajaran_id
    JOIN guru g ON g.id = j.guru_id
    JOIN users u ON u.id = g.user_id
"""

_ORDER = "ORDER BY FIELD(j.hari, 'Senin', 'Selasa', 'Rabu', 'Kamis', 'Jumat', 'Sabtu', 'Minggu'), j.jam_mulai ASC"


def row_to_schedule(r: dict) -> Schedule:
    return Schedule(
        id=int(r["id"]),
        kelas_id=int(r["kelas_id"]),
        mata_pelajaran_id=int(r["mata_pelajaran_id"]),
        guru_id=int(r["guru_id"]),
        hari=Weekday(r["hari"]),
        jam_mulai=normalize_mysql_time(r["jam_mulai"]),
        jam_selesai=normalize_mysql_time(r["jam_selesai"]),
        ruang=r.get("ruang"),
        semester=r.get("semester"),
        tahun_ajaran=r.get("tahun_ajaran"),
        nama_kelas=r.get("nama_kelas"),
        nama_pelajaran=r.get("nama_pelajaran"),
        nama_guru=r.get("nama_guru"),
    )


def _values(fields: ScheduleFields) -> tuple:
    return (
        int(fields.kelas_id),
        int(fields.mata_pelajaran_id),
        int(fields.guru_id),
        fields.hari.value,
        fields.jam_mulai,
        fields.jam_selesai,
        fields.ruang,
        fields.semester,
        fields.tahun_ajaran,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(
        self,
        *,
        kelas_id: Optional[int] = None,
        guru_id: Optional[int] = None,
        mata_pelajaran_id: Optional[int] = None,
        hari: Optional[Weekday] = None,
        search: Optional[str] = None,
    ) -> Sequence[Schedule]:
        clauses: list[str] = []
        params: list[object] = []
        for column, value in (("j.kelas_id", kelas_id), ("j.guru_id", guru_id), ("j.mata_pelajaran_id", mata_pelajaran_id)):
            if value is not None:
                clauses.append(f"{column}=%s")
                params.append(int(value))
        if hari is not None:
            clauses.append("j.hari=%s")
            params.append(hari.value)
        if search:
            clauses.append("(mp.nama_pelajaran LIKE %s OR k.nama_kelas LIKE %s OR u.full_name LIKE %s OR j.ruang LIKE %s)")
            params.extend([like(search)] * 4)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} {_ORDER}", tuple(params))
            return [row_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE j.id=%s", (int(schedule_id),))
            row = fetchone(cur)
            return row_to_schedule(row) if row else None

    def has_overlap(
        self,
        *,
        kelas_id: int,
        guru_id: int,
        hari: Weekday,
        jam_mulai: time,
        jam_selesai: time,
        exclude_id: Optional[int] = None,
    ) -> bool:
        sql = """
            SELECT id FROM jadwal
            WHERE (kelas_id=%s OR guru_id=%s) AND hari=%s AND jam_mulai < %s AND jam_selesai > %s
        """
        params: list[object] = [int(kelas_id), int(guru_id), hari.value, jam_selesai, jam_mulai]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create(self, fields: ScheduleFields) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO jadwal(kelas_id, mata_pelajaran_id, guru_id, hari, jam_mulai, jam_selesai,
                                   ruang, semester, tahun_ajaran)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(fields),
            )
            return int(cur.lastrowid)

    def update(self, schedule_id: int, fields: ScheduleFields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE jadwal
                SET kelas_id=%s, mata_pelajaran_id=%s, guru_id=%s, hari=%s, jam_mulai=%s, jam_selesai=%s,
                    ruang=%s, semester=%s, tahun_ajaran=%s
                WHERE id=%s
                """,
                _values(fields) + (int(schedule_id),),
            )
            return cur.rowcount > 0

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM jadwal WHERE id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def count_for_subject(self, subject_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM jadwal WHERE mata_pelajaran_id=%s", (int(subject_id),))
            return int((fetchone(cur) or {}).get("total") or 0)

    def class_ids_for_teacher(self, guru_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT kelas_id FROM jadwal WHERE guru_id=%s", (int(guru_id),))
            return [int(r["kelas_id"]) for r in fetchall(cur)]
