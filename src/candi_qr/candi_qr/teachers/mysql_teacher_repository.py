from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like
from ..users.model import NewAccount
from ..users.mysql_user_repository import insert_user, update_user_columns
from .model import Teacher, TeacherProfile
from .repository import TeacherRepository

_SELECT = """
    SELECT
        g.id, g.user_id, g.nip, g.mata_pelajaran_id, g.jenis_kelamin, g.alamat, g.tanggal_lahir,
        u.full_name, u.username, u.email, u.phone,
        mp.nama_pelajaran
    FROM guru g
    JOIN users u ON u.id = g.user_id
    LEFT JOIN mata_pelajaran mp ON mp.id = g.mata_pelajaran_id
"""

DUPLICATE_MESSAGE = "Username, email, atau NIP sudah digunakan"


def row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        nip=r["nip"],
        full_name=r["full_name"],
        username=r["username"],
        email=r.get("email"),
        phone=r.get("phone"),
        mata_pelajaran_id=r.get("mata_pelajaran_id"),
        nama_pelajaran=r.get("nama_pelajaran"),
        jenis_kelamin=r.get("jenis_kelamin"),
        alamat=r.get("alamat"),
        tanggal_lahir=r.get("tanggal_lahir"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where}", params)
            row = fetchone(cur)
            return row_to_teacher(row) if row else None

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Teacher]:
        where = ""
        params: tuple = ()
        if search:
            where = "WHERE (u.full_name LIKE %s OR g.nip LIKE %s OR u.email LIKE %s)"
            params = (like(search),) * 3
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY u.full_name ASC", params)
            return [row_to_teacher(r) for r in fetchall(cur)]

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._get_one("g.id=%s", (int(teacher_id),))

    def get_by_user_id(self, user_id: int) -> Optional[Teacher]:
        return self._get_one("g.user_id=%s", (int(user_id),))

    def has_conflict(self, *, nip: str, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT id FROM guru WHERE nip=%s"
        params: list[object] = [nip]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create(self, *, account: NewAccount, profile: TeacherProfile) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                user_id = insert_user(
                    cur,
                    username=account.username,
                    email=account.email,
                    password_hash=account.password_hash,
                    role=Role.TEACHER,
                    full_name=account.full_name,
                    phone=account.phone,
                )
                cur.execute(
                    """
                    INSERT INTO guru(user_id, nip, mata_pelajaran_id, jenis_kelamin, alamat, tanggal_lahir)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user_id,
                        profile.nip,
                        profile.mata_pelajaran_id,
                        profile.jenis_kelamin,
                        profile.alamat,
                        profile.tanggal_lahir,
                    ),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def update(self, teacher_id: int, *, account_fields: dict, profile: TeacherProfile) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT user_id FROM guru WHERE id=%s", (int(teacher_id),))
                row = fetchone(cur)
                if not row:
                    return False

                update_user_columns(cur, int(row["user_id"]), account_fields)
                cur.execute(
                    """
                    UPDATE guru
                    SET nip=%s, mata_pelajaran_id=%s, jenis_kelamin=%s, alamat=%s, tanggal_lahir=%s
                    WHERE id=%s
                    """,
                    (
                        profile.nip,
                        profile.mata_pelajaran_id,
                        profile.jenis_kelamin,
                        profile.alamat,
                        profile.tanggal_lahir,
                        int(teacher_id),
                    ),
                )
                return True
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def delete(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM guru WHERE id=%s", (int(teacher_id),))
            row = fetchone(cur)
            if not row:
                return False
            cur.execute("DELETE FROM guru WHERE id=%s", (int(teacher_id),))
            cur.execute("DELETE FROM users WHERE id=%s", (int(row["user_id"]),))
            return True

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM guru")
            return int((fetchone(cur) or {}).get("total") or 0)
