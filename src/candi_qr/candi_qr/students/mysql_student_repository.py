from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like
from ..users.model import NewAccount
from ..users.mysql_user_repository import insert_user, update_user_columns
from .model import Student, StudentProfile
from .repository import StudentRepository

_SELECT = """
    SELECT
        s.id, s.user_id, s.nis, s.nisn, s.kelas_id, s.barcode_id, s.jenis_kelamin,
        s.alamat, s.tanggal_lahir, s.nama_ortu, s.phone_ortu,
        u.full_name, u.username, u.email, u.phone,
        k.nama_kelas
    FROM siswa s
    JOIN users u ON u.id = s.user_id
    LEFT JOIN kelas k ON k.id = s.kelas_id
"""

DUPLICATE_MESSAGE = "Username, email, NIS, atau barcode sudah digunakan"


def row_to_student(r: dict) -> Student:
    return Student(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        nis=r["nis"],
        kelas_id=int(r["kelas_id"]),
        barcode_id=r["barcode_id"],
        full_name=r["full_name"],
        username=r["username"],
        email=r.get("email"),
        phone=r.get("phone"),
        nisn=r.get("nisn"),
        jenis_kelamin=r.get("jenis_kelamin"),
        alamat=r.get("alamat"),
        tanggal_lahir=r.get("tanggal_lahir"),
        nama_ortu=r.get("nama_ortu"),
        phone_ortu=r.get("phone_ortu"),
        nama_kelas=r.get("nama_kelas"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where}", params)
            row = fetchone(cur)
            return row_to_student(row) if row else None

    def list_all(self, *, kelas_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        if kelas_id is not None:
            clauses.append("s.kelas_id=%s")
            params.append(int(kelas_id))
        if search:
            clauses.append("(u.full_name LIKE %s OR s.nis LIKE %s OR u.email LIKE %s)")
            params.extend([like(search)] * 3)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY u.full_name ASC", tuple(params))
            return [row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._get_one("s.id=%s", (int(student_id),))

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        return self._get_one("s.user_id=%s", (int(user_id),))

    def get_by_barcode(self, barcode_id: str) -> Optional[Student]:
        return self._get_one("s.barcode_id=%s", (barcode_id,))

    def has_conflict(self, *, nis: str, barcode_id: str, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT id FROM siswa WHERE (nis=%s OR barcode_id=%s)"
        params: list[object] = [nis, barcode_id]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create(self, *, account: NewAccount, profile: StudentProfile) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                user_id = insert_user(
                    cur,
                    username=account.username,
                    email=account.email,
                    password_hash=account.password_hash,
                    role=Role.STUDENT,
                    full_name=account.full_name,
                    phone=account.phone,
                )
                cur.execute(
                    """
                    INSERT INTO siswa(user_id, nis, nisn, kelas_id, barcode_id, jenis_kelamin,
                                      alamat, tanggal_lahir, nama_ortu, phone_ortu)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user_id,
                        profile.nis,
                        profile.nisn,
                        int(profile.kelas_id),
                        profile.barcode_id,
                        profile.jenis_kelamin,
                        profile.alamat,
                        profile.tanggal_lahir,
                        profile.nama_ortu,
                        profile.phone_ortu,
                    ),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def update(self, student_id: int, *, account_fields: dict, profile: StudentProfile) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT user_id FROM siswa WHERE id=%s", (int(student_id),))
                row = fetchone(cur)
                if not row:
                    return False

                update_user_columns(cur, int(row["user_id"]), account_fields)
                cur.execute(
                    """
                    UPDATE siswa
                    SET nis=%s, nisn=%s, kelas_id=%s, barcode_id=%s, jenis_kelamin=%s,
                        alamat=%s, tanggal_lahir=%s, nama_ortu=%s, phone_ortu=%s
                    WHERE id=%s
                    """,
                    (
                        profile.nis,
                        profile.nisn,
                        int(profile.kelas_id),
                        profile.barcode_id,
                        profile.jenis_kelamin,
                        profile.alamat,
                        profile.tanggal_lahir,
                        profile.nama_ortu,
                        profile.phone_ortu,
                        int(student_id),
                    ),
                )
                return True
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(DUPLICATE_MESSAGE) from e
            raise

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM siswa WHERE id=%s", (int(student_id),))
            row = fetchone(cur)
            if not row:
                return False
            cur.execute("DELETE FROM siswa WHERE id=%s", (int(student_id),))
            cur.execute("DELETE FROM users WHERE id=%s", (int(row["user_id"]),))
            return True

    def count(self, *, kelas_id: Optional[int] = None) -> int:
        sql = "SELECT COUNT(*) AS total FROM siswa"
        params: tuple = ()
        if kelas_id is not None:
            sql += " WHERE kelas_id=%s"
            params = (int(kelas_id),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return int((fetchone(cur) or {}).get("total") or 0)
