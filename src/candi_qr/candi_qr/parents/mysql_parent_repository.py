from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like
from ..users.model import NewAccount
from ..users.mysql_user_repository import insert_user, update_user_columns
from .model import Parent, ParentProfile
from .repository import ParentRepository

_SELECT = """
    SELECT
        ot.id, ot.user_id, ot.siswa_id, ot.hubungan, ot.pekerjaan, ot.alamat,
        u.full_name, u.username, u.email, u.phone,
        su.full_name AS nama_siswa
    FROM orang_tua ot
    JOIN users u ON u.id = ot.user_id
    LEFT JOIN siswa s ON s.id = ot.siswa_id
    LEFT JOIN users su ON su.id = s.user_id
"""

DUPLICATE_MESSAGE = "Username atau email sudah digunakan"


def row_to_parent(r: dict) -> Parent:
    return Parent(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        siswa_id=int(r["siswa_id"]),
        full_name=r["full_name"],
        username=r["username"],
        email=r.get("email"),
        phone=r.get("phone"),
        hubungan=r.get("hubungan"),
        pekerjaan=r.get("pekerjaan"),
        alamat=r.get("alamat"),
        nama_siswa=r.get("nama_siswa"),
    )


class MySQLParentRepository(ParentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Parent]:
        where = ""
        params: tuple = ()
        if search:
            where = "WHERE (u.full_name LIKE %s OR u.email LIKE %s OR su.full_name LIKE %s)"
            params = (like(search),) * 3
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY u.full_name ASC", params)
            return [row_to_parent(r) for r in fetchall(cur)]

    def get_by_id(self, parent_id: int) -> Optional[Parent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ot.id=%s", (int(parent_id),))
            row = fetchone(cur)
            return row_to_parent(row) if row else None

    def list_for_user(self, user_id: int) -> Sequence[Parent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ot.user_id=%s ORDER BY su.full_name ASC", (int(user_id),))
            return [row_to_parent(r) for r in fetchall(cur)]

    def create(self, *, account: NewAccount, profile: ParentProfile) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                user_id = insert_user(
                    cur,
                    username=account.username,
                    email=account.email,
                    password_hash=account.password_hash,
                    role=Role.PARENT,
                    full_name=account.full_name,
                    phone=account.phone,
                )
                cur.execute(
                    "INSERT INTO orang_tua(user_id, siswa_id, hubungan, pekerjaan, alamat) VALUES(%s,%s,%s,%s,%s)",
                    (user_id, int(profile.siswa_id), profile.hubungan, profile.pekerjaan, profile.alamat),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def update(self, parent_id: int, *, account_fields: dict, profile: ParentProfile) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT user_id FROM orang_tua WHERE id=%s", (int(parent_id),))
                row = fetchone(cur)
                if not row:
                    return False

                update_user_columns(cur, int(row["user_id"]), account_fields)
                cur.execute(
                    "UPDATE orang_tua SET siswa_id=%s, hubungan=%s, pekerjaan=%s, alamat=%s WHERE id=%s",
                    (int(profile.siswa_id), profile.hubungan, profile.pekerjaan, profile.alamat, int(parent_id)),
                )
                return True
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def delete(self, parent_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM orang_tua WHERE id=%s", (int(parent_id),))
            row = fetchone(cur)
            if not row:
                return False
            user_id = int(row["user_id"])
            cur.execute("DELETE FROM orang_tua WHERE id=%s", (int(parent_id),))
            # the login survives while it still guards another child
            cur.execute("SELECT COUNT(*) AS total FROM orang_tua WHERE user_id=%s", (user_id,))
            if int((fetchone(cur) or {}).get("total") or 0) == 0:
                cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return True

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM orang_tua")
            return int((fetchone(cur) or {}).get("total") or 0)
