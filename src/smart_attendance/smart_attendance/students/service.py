from __future__ import annotations

from .repository import StudentRepository


class StudentService:
    """Use case: browse the student roster (teacher side)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_roster(self) -> list[dict]:
        return [entry.to_dict() for entry in self._students.list_roster()]
