from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like
from .model import Subject
from .repository import SubjectRepository

_COLUMNS = "id, nama_pelajaran, kode_pelajaran, deskripsi"
DUPLICATE_MESSAGE = "Kode mata pelajaran sudah digunakan"


def row_to_subject(r: dict) -> Subject:
    return Subject(
        id=int(r["id"]),
        nama_pelajaran=r["nama_pelajaran"],
        kode_pelajaran=r["kode_pelajaran"],
        deskripsi=r.get("deskripsi"),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Subject]:
        where = ""
        params: tuple = ()
        if search:
            where = "WHERE nama_pelajaran LIKE %s OR kode_pelajaran LIKE %s"
            params = (like(search), like(search))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM mata_pelajaran {where} ORDER BY nama_pelajaran ASC", params)
            return [row_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM mata_pelajaran WHERE id=%s", (int(subject_id),))
            row = fetchone(cur)
            return row_to_subject(row) if row else None

    def code_taken(self, kode_pelajaran: str, *, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT id FROM mata_pelajaran WHERE kode_pelajaran=%s"
        params: list[object] = [kode_pelajaran]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create(self, *, nama_pelajaran: str, kode_pelajaran: str, deskripsi: Optional[str]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO mata_pelajaran(nama_pelajaran, kode_pelajaran, deskripsi) VALUES(%s,%s,%s)",
                    (nama_pelajaran, kode_pelajaran, deskripsi),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def update(self, subject_id: int, *, nama_pelajaran: str, kode_pelajaran: str, deskripsi: Optional[str]) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE mata_pelajaran SET nama_pelajaran=%s, kode_pelajaran=%s, deskripsi=%s WHERE id=%s",
                    (nama_pelajaran, kode_pelajaran, deskripsi, int(subject_id)),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def delete(self, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM mata_pelajaran WHERE id=%s", (int(subject_id),))
            return cur.rowcount > 0
