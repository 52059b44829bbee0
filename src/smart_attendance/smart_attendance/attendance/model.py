from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_json_date, to_json_datetime
from ..core.enums import AttendanceStatus
from .statistics import AttendanceStats


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark.

    Unique per (student_id, teacher_id, subject, attendance_date).
    """

    attendance_id: int
    student_id: int
    teacher_id: int
    subject: str
    attendance_date: date
    status: AttendanceStatus
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "teacher_id": self.teacher_id,
            "subject": self.subject,
            "date": to_json_date(self.attendance_date),
            "status": self.status.value,
            "created_at": to_json_datetime(self.created_at),
        }


@dataclass(frozen=True)
class MarkResult:
    record: AttendanceRecord
    student_name: str
    created: bool

    @property
    def message(self) -> str:
        return "Attendance marked successfully" if self.created else "Attendance updated successfully"


@dataclass(frozen=True)
class SummaryRow:
    """Read-model: per-student status counts across all subjects."""

    student_id: int
    name: str
    present: int
    absent: int
    late: int

    @property
    def stats(self) -> AttendanceStats:
        return AttendanceStats(present=self.present, absent=self.absent, late=self.late)

    def to_dict(self) -> dict:
        stats = self.stats
        return {
            "student_id": self.student_id,
            "name": self.name,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "total": stats.total,
            "percentage": stats.percentage,
        }


@dataclass(frozen=True)
class TeacherRecordRow:
    """Read-model: one of a teacher's own marks, joined with the student name."""

    attendance_id: int
    student_id: int
    student_name: str
    subject: str
    attendance_date: date
    status: AttendanceStatus
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "subject": self.subject,
            "date": to_json_date(self.attendance_date),
            "status": self.status.value,
            "created_at": to_json_datetime(self.created_at),
        }


@dataclass(frozen=True)
class StudentHistoryRow:
    """Read-model: one of a student's marks, joined with the marking teacher's name."""

    attendance_id: int
    subject: str
    attendance_date: date
    status: AttendanceStatus
    teacher_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "date": to_json_date(self.attendance_date),
            "status": self.status.value,
            "subject": self.subject,
            "teacher_name": self.teacher_name,
        }


@dataclass(frozen=True)
class TeacherRecordFilters:
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    student_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "date_from": to_json_date(self.date_from),
            "date_to": to_json_date(self.date_to),
            "student_id": self.student_id,
        }


@dataclass(frozen=True)
class StudentHistoryFilters:
    subject: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "date_from": to_json_date(self.date_from),
            "date_to": to_json_date(self.date_to),
        }


@dataclass(frozen=True)
class TeacherRecordsView:
    filters: TeacherRecordFilters
    records: Sequence[TeacherRecordRow]
    statistics: AttendanceStats


@dataclass(frozen=True)
class StudentHistoryView:
    filters: StudentHistoryFilters
    records: Sequence[StudentHistoryRow]
    subjects: Sequence[str]
    statistics: AttendanceStats
