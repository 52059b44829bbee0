from __future__ import annotations

from typing import Optional, Protocol

from .model import Teacher


class TeacherRepository(Protocol):
    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, password_hash: str, subject: str) -> Teacher:
        """Persist a teacher; raises DuplicateEmailError when the email is taken."""

        raise NotImplementedError
