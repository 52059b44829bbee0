from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_json_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a registered teacher. Immutable after registration."""

    teacher_id: int
    name: str
    email: str
    password_hash: str
    subject: str
    created_at: Optional[datetime] = None

    role = Role.TEACHER

    @property
    def actor_id(self) -> int:
        return self.teacher_id

    def public_view(self) -> dict:
        return {
            "id": self.teacher_id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "created_at": to_json_datetime(self.created_at),
        }
