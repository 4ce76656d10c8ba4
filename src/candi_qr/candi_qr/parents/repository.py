from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..users.model import NewAccount
from .model import Parent, ParentProfile


class ParentRepository(Protocol):
    def list_all(self, *, search: Optional[str] = None) -> Sequence[Parent]:
        raise NotImplementedError

    def get_by_id(self, parent_id: int) -> Optional[Parent]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Parent]:
        """Every guardian row owned by one login, i.e. one row per child."""

        raise NotImplementedError

    def create(self, *, account: NewAccount, profile: ParentProfile) -> int:
        raise NotImplementedError

    def update(self, parent_id: int, *, account_fields: dict, profile: ParentProfile) -> bool:
        raise NotImplementedError

    def delete(self, parent_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
