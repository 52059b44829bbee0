from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_json_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student. Immutable after registration."""

    student_id: int
    name: str
    email: str
    password_hash: str
    branch: str
    year: int
    created_at: Optional[datetime] = None

    role = Role.STUDENT

    @property
    def actor_id(self) -> int:
        return self.student_id

    def public_view(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "branch": self.branch,
            "year": self.year,
            "created_at": to_json_datetime(self.created_at),
        }


@dataclass(frozen=True)
class RosterEntry:
    """Read-model for the teacher's student picker."""

    student_id: int
    name: str
    email: str
    branch: str
    year: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "branch": self.branch,
            "year": self.year,
        }
