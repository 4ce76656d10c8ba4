from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..users.model import NewAccount
from .model import Student, StudentProfile


class StudentRepository(Protocol):
    def list_all(self, *, kelas_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_barcode(self, barcode_id: str) -> Optional[Student]:
        raise NotImplementedError

    def has_conflict(self, *, nis: str, barcode_id: str, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, *, account: NewAccount, profile: StudentProfile) -> int:
        """Insert the user row and the student row in one transaction."""

        raise NotImplementedError

    def update(self, student_id: int, *, account_fields: dict, profile: StudentProfile) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        """Hard delete of the student and its user account."""

        raise NotImplementedError

    def count(self, *, kelas_id: Optional[int] = None) -> int:
        raise NotImplementedError
