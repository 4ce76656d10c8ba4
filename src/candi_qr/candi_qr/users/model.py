from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Entitas domain: User (akun login).

    Catatan: objek data murni, tanpa kode akses database.
    """

    id: int
    username: str
    email: Optional[str]
    password_hash: str
    role: Role
    full_name: str
    phone: Optional[str] = None
    is_active: bool = True

    def public(self) -> dict:
        """Fields that are safe to return to clients (no credential hash)."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "full_name": self.full_name,
            "phone": self.phone,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class NewAccount:
    """Validated login data for a user row created together with a profile."""

    username: str
    email: Optional[str]
    password_hash: str
    full_name: str
    phone: Optional[str] = None
