from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Actor role carried in session credentials."""

    STUDENT = "student"
    TEACHER = "teacher"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database (lowercase)."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        return cls(str(value).strip().lower())
