from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import (
    AttendanceRecord,
    StudentHistoryFilters,
    StudentHistoryRow,
    SummaryRow,
    TeacherRecordFilters,
    TeacherRecordRow,
)


class AttendanceRepository(Protocol):
    def upsert_mark(
        self,
        *,
        student_id: int,
        teacher_id: int,
        subject: str,
        attendance_date: date,
        status: AttendanceStatus,
    ) -> tuple[AttendanceRecord, bool]:
        """Insert or overwrite the mark for the natural key.

        Returns the stored record and True when a new row was created.
        """

        raise NotImplementedError

    def summarize_by_student(self) -> Sequence[SummaryRow]:
        raise NotImplementedError

    def list_for_teacher(
        self, *, teacher_id: int, subject: str, filters: TeacherRecordFilters
    ) -> Sequence[TeacherRecordRow]:
        raise NotImplementedError

    def history_for_student(self, *, student_id: int, filters: StudentHistoryFilters) -> Sequence[StudentHistoryRow]:
        raise NotImplementedError

    def subjects_for_student(self, student_id: int) -> Sequence[str]:
        raise NotImplementedError
