from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, username, email, password AS password_hash, role, full_name, phone, is_active"

_UPDATABLE = {
    "username": "username",
    "email": "email",
    "password_hash": "password",
    "full_name": "full_name",
    "phone": "phone",
    "is_active": "is_active",
}


def row_to_user(r: dict) -> User:
    return User(
        id=int(r["id"]),
        username=r["username"],
        email=r.get("email"),
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        full_name=r["full_name"],
        phone=r.get("phone"),
        is_active=bool(r.get("is_active", True)),
    )


def insert_user(cur, *, username, email, password_hash, role: Role, full_name, phone) -> int:
    """Shared by the profile repositories that create a user and its profile in one transaction."""
    cur.execute(
        """
        INSERT INTO users(username, email, password, role, full_name, phone, is_active)
        VALUES(%s,%s,%s,%s,%s,%s,1)
        """,
        (username, email, password_hash, role.value, full_name, phone),
    )
    return int(cur.lastrowid)


def update_user_columns(cur, user_id: int, fields: dict) -> int:
    sets: list[str] = []
    params: list[object] = []
    for key, value in fields.items():
        column = _UPDATABLE.get(key)
        if column is None:
            raise KeyError(f"Column not updatable: {key}")
        sets.append(f"{column}=%s")
        params.append(value)
    if not sets:
        return 0
    params.append(int(user_id))
    cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE id=%s", tuple(params))
    return cur.rowcount


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def get_by_login(self, identifier: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s OR email=%s LIMIT 1",
                (identifier, identifier),
            )
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def has_conflict(self, *, username: Optional[str], email: Optional[str], exclude_user_id: Optional[int] = None) -> bool:
        clauses: list[str] = []
        params: list[object] = []
        if username:
            clauses.append("username=%s")
            params.append(username)
        if email:
            clauses.append("email=%s")
            params.append(email)
        if not clauses:
            return False

        where = f"({' OR '.join(clauses)})"
        if exclude_user_id is not None:
            where += " AND id<>%s"
            params.append(int(exclude_user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id FROM users WHERE {where} LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def create_user(
        self,
        *,
        username: str,
        email: Optional[str],
        password_hash: str,
        role: Role,
        full_name: str,
        phone: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_user(
                cur,
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
                full_name=full_name,
                phone=phone,
            )

    def update_fields(self, user_id: int, **fields) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return update_user_columns(cur, user_id, fields) > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_users(
        self,
        *,
        role: Optional[Role] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[Sequence[User], int]:
        clauses: list[str] = []
        params: list[object] = []
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        if search:
            clauses.append("(full_name LIKE %s OR username LIKE %s OR email LIKE %s)")
            params.extend([like(search)] * 3)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM users {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                {where}
                ORDER BY full_name ASC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [row_to_user(r) for r in fetchall(cur)], total

    def count_by_role(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role, COUNT(*) AS total FROM users GROUP BY role")
            return {r["role"]: int(r["total"]) for r in fetchall(cur)}
