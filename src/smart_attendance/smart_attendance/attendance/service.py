from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.datetime_utils import optional_iso_date, require_iso_date
from ..common.validators import is_blank, optional_int, require_fields, require_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidStatusError, StudentNotFoundError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.model import Teacher
from .model import (
    MarkResult,
    StudentHistoryFilters,
    StudentHistoryView,
    SummaryRow,
    TeacherRecordFilters,
    TeacherRecordsView,
)
from .repository import AttendanceRepository
from .statistics import AttendanceStats

logger = logging.getLogger(__name__)

VALID_STATUSES = ", ".join(s.value for s in AttendanceStatus)


class AttendanceService:
    """The attendance ledger: marking plus the role-scoped read queries."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    @staticmethod
    def _parse_status(value: Any) -> AttendanceStatus:
        try:
            return AttendanceStatus.parse(value)
        except ValueError:
            raise InvalidStatusError(f"Status must be one of: {VALID_STATUSES}")

    def mark_attendance(self, teacher: Teacher, *, student_id: Any, attendance_date: Any, status: Any) -> MarkResult:
        """Create or overwrite the teacher's mark for one student on one day.

        The subject always comes from the marking teacher, so a teacher can
        only ever write into their own (teacher, subject) slice.
        """
        require_fields(
            {"student_id": student_id, "date": attendance_date, "status": status},
            ("student_id", "date", "status"),
        )
        parsed_status = self._parse_status(status)
        sid = require_int(student_id, "student_id")
        day = require_iso_date(attendance_date, "date")

        student = self._students.get_by_id(sid)
        if not student:
            raise StudentNotFoundError("Student not found")

        record, created = self._attendance.upsert_mark(
            student_id=sid,
            teacher_id=teacher.teacher_id,
            subject=teacher.subject,
            attendance_date=day,
            status=parsed_status,
        )
        logger.info(
            "Teacher id=%s %s %s for student id=%s on %s (%s)",
            teacher.teacher_id,
            "marked" if created else "updated",
            parsed_status.value,
            sid,
            day,
            teacher.subject,
        )
        return MarkResult(record=record, student_name=student.name, created=created)

    def summarize_for_teacher(self) -> list[SummaryRow]:
        # Full roster across every teacher and subject, unlike list_for_teacher.
        return list(self._attendance.summarize_by_student())

    def list_for_teacher(
        self,
        teacher: Teacher,
        *,
        date_from: Any = None,
        date_to: Any = None,
        student_id: Any = None,
    ) -> TeacherRecordsView:
        filters = TeacherRecordFilters(
            date_from=optional_iso_date(date_from, "date_from"),
            date_to=optional_iso_date(date_to, "date_to"),
            student_id=optional_int(student_id, "student_id"),
        )
        rows = list(
            self._attendance.list_for_teacher(
                teacher_id=teacher.teacher_id,
                subject=teacher.subject,
                filters=filters,
            )
        )
        return TeacherRecordsView(
            filters=filters,
            records=rows,
            statistics=AttendanceStats.from_statuses(r.status for r in rows),
        )

    def history_for_student(
        self,
        student: Student,
        *,
        subject: Optional[str] = None,
        date_from: Any = None,
        date_to: Any = None,
    ) -> StudentHistoryView:
        filters = StudentHistoryFilters(
            subject=None if is_blank(subject) else str(subject).strip(),
            date_from=optional_iso_date(date_from, "date_from"),
            date_to=optional_iso_date(date_to, "date_to"),
        )
        rows = list(self._attendance.history_for_student(student_id=student.student_id, filters=filters))
        return StudentHistoryView(
            filters=filters,
            records=rows,
            subjects=list(self._attendance.subjects_for_student(student.student_id)),
            statistics=AttendanceStats.from_statuses(r.status for r in rows),
        )
