from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import RosterEntry, Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, password_hash: str, branch: str, year: int) -> Student:
        """Persist a student; raises DuplicateEmailError when the email is taken."""

        raise NotImplementedError

    def list_roster(self) -> Sequence[RosterEntry]:
        raise NotImplementedError
