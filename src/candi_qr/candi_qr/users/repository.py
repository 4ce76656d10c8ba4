from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    The service layer depends on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_login(self, identifier: str) -> Optional[User]:
        """Match on username or email."""

        raise NotImplementedError

    def has_conflict(self, *, username: Optional[str], email: Optional[str], exclude_user_id: Optional[int] = None) -> bool:
        """True when another user already owns the username or email."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_fields(self, user_id: int, **fields) -> bool:
        """Update a whitelisted subset of columns (username, email, password_hash, full_name, phone, is_active)."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_users(
        self,
        *,
        role: Optional[Role] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[Sequence[User], int]:
        """Return one page of users plus the total match count."""

        raise NotImplementedError

    def count_by_role(self) -> dict:
        raise NotImplementedError
