from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..users.model import NewAccount
from .model import Teacher, TeacherProfile


class TeacherRepository(Protocol):
    def list_all(self, *, search: Optional[str] = None) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def has_conflict(self, *, nip: str, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, *, account: NewAccount, profile: TeacherProfile) -> int:
        raise NotImplementedError

    def update(self, teacher_id: int, *, account_fields: dict, profile: TeacherProfile) -> bool:
        raise NotImplementedError

    def delete(self, teacher_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
