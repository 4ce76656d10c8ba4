from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like
from .model import ClassFields, SchoolClass
from .repository import ClassRepository

_SELECT = """
    SELECT
        k.id, k.nama_kelas, k.tingkat, k.jurusan, k.tahun_ajaran, k.wali_kelas_id,
        u.full_name AS wali_kelas_nama,
        (SELECT COUNT(*) FROM siswa s WHERE s.kelas_id = k.id) AS jumlah_siswa
    FROM kelas k
    LEFT JOIN guru g ON g.id = k.wali_kelas_id
    LEFT JOIN users u ON u.id = g.user_id
"""


def row_to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        id=int(r["id"]),
        nama_kelas=r["nama_kelas"],
        tingkat=r.get("tingkat"),
        jurusan=r.get("jurusan"),
        tahun_ajaran=r.get("tahun_ajaran"),
        wali_kelas_id=r.get("wali_kelas_id"),
        wali_kelas_nama=r.get("wali_kelas_nama"),
        jumlah_siswa=int(r.get("jumlah_siswa") or 0),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, tingkat: Optional[str] = None, search: Optional[str] = None) -> Sequence[SchoolClass]:
        clauses: list[str] = []
        params: list[object] = []
        if tingkat:
            clauses.append("k.tingkat=%s")
            params.append(tingkat)
        if search:
            clauses.append("(k.nama_kelas LIKE %s OR u.full_name LIKE %s)")
            params.extend([like(search)] * 2)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY k.tingkat ASC, k.nama_kelas ASC", tuple(params))
            return [row_to_class(r) for r in fetchall(cur)]

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE k.id=%s", (int(class_id),))
            row = fetchone(cur)
            return row_to_class(row) if row else None

    def name_taken(self, nama_kelas: str, *, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT id FROM kelas WHERE nama_kelas=%s"
        params: list[object] = [nama_kelas]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create(self, fields: ClassFields) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO kelas(nama_kelas, tingkat, jurusan, tahun_ajaran, wali_kelas_id)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (fields.nama_kelas, fields.tingkat, fields.jurusan, fields.tahun_ajaran, fields.wali_kelas_id),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Nama kelas sudah digunakan") from e
            raise

    def update(self, class_id: int, fields: ClassFields) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE kelas
                    SET nama_kelas=%s, tingkat=%s, jurusan=%s, tahun_ajaran=%s, wali_kelas_id=%s
                    WHERE id=%s
                    """,
                    (
                        fields.nama_kelas,
                        fields.tingkat,
                        fields.jurusan,
                        fields.tahun_ajaran,
                        fields.wali_kelas_id,
                        int(class_id),
                    ),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Nama kelas sudah digunakan") from e
            raise

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kelas WHERE id=%s", (int(class_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM kelas")
            return int((fetchone(cur) or {}).get("total") or 0)
