from __future__ import annotations

from datetime import date
from typing import Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import StudentNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_missing_parent
from ..database.query import WhereClause
from .model import (
    AttendanceRecord,
    StudentHistoryFilters,
    StudentHistoryRow,
    SummaryRow,
    TeacherRecordFilters,
    TeacherRecordRow,
)
from .repository import AttendanceRepository

_NATURAL_KEY = "student_id=%s AND teacher_id=%s AND subject=%s AND attendance_date=%s"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        teacher_id=int(r["teacher_id"]),
        subject=r["subject"],
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_mark(
        self,
        *,
        student_id: int,
        teacher_id: int,
        subject: str,
        attendance_date: date,
        status: AttendanceStatus,
    ) -> tuple[AttendanceRecord, bool]:
        key = (int(student_id), int(teacher_id), subject, attendance_date)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # The unique index settles concurrent first marks: one inserts,
                # the other becomes an update. Affected rows: 1 inserted,
                # 2 changed, 0 unchanged (FOUND_ROWS is off on our connections).
                cur.execute(
                    """
                    INSERT INTO attendance(student_id, teacher_id, subject, attendance_date, status)
                    VALUES(%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status)
                    """,
                    key + (status.value,),
                )
                created = cur.rowcount == 1

                cur.execute(
                    f"""
                    SELECT attendance_id, student_id, teacher_id, subject, attendance_date, status, created_at
                    FROM attendance
                    WHERE {_NATURAL_KEY}
                    """,
                    key,
                )
                return _to_record(fetchone(cur)), created
        except mysql.connector.IntegrityError as e:
            if is_missing_parent(e):
                raise StudentNotFoundError("Student not found") from e
            raise

    def summarize_by_student(self) -> Sequence[SummaryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.student_id, s.name,
                    COUNT(CASE WHEN a.status = 'present' THEN 1 END) AS present,
                    COUNT(CASE WHEN a.status = 'absent' THEN 1 END) AS absent,
                    COUNT(CASE WHEN a.status = 'late' THEN 1 END) AS late
                FROM students s
                LEFT JOIN attendance a ON a.student_id = s.student_id
                GROUP BY s.student_id, s.name
                ORDER BY s.name, s.student_id
                """
            )
            return [
                SummaryRow(
                    student_id=int(r["student_id"]),
                    name=r["name"],
                    present=int(r.get("present") or 0),
                    absent=int(r.get("absent") or 0),
                    late=int(r.get("late") or 0),
                )
                for r in fetchall(cur)
            ]

    def list_for_teacher(
        self, *, teacher_id: int, subject: str, filters: TeacherRecordFilters
    ) -> Sequence[TeacherRecordRow]:
        where, params = (
            WhereClause()
            .equals("a.teacher_id", int(teacher_id))
            .equals("a.subject", subject)
            .on_or_after("a.attendance_date", filters.date_from)
            .on_or_before("a.attendance_date", filters.date_to)
            .equals_if("a.student_id", filters.student_id)
            .render()
        )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.attendance_id, a.student_id, s.name AS student_name,
                       a.subject, a.attendance_date, a.status, a.created_at
                FROM attendance a
                JOIN students s ON s.student_id = a.student_id
                {where}
                ORDER BY a.attendance_date DESC, s.name ASC
                """,
                params,
            )
            return [
                TeacherRecordRow(
                    attendance_id=int(r["attendance_id"]),
                    student_id=int(r["student_id"]),
                    student_name=r["student_name"],
                    subject=r["subject"],
                    attendance_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def history_for_student(self, *, student_id: int, filters: StudentHistoryFilters) -> Sequence[StudentHistoryRow]:
        where, params = (
            WhereClause()
            .equals("a.student_id", int(student_id))
            .contains_ci("a.subject", filters.subject)
            .on_or_after("a.attendance_date", filters.date_from)
            .on_or_before("a.attendance_date", filters.date_to)
            .render()
        )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.attendance_id, a.attendance_date, a.status, a.subject,
                       t.name AS teacher_name
                FROM attendance a
                LEFT JOIN teachers t ON t.teacher_id = a.teacher_id
                {where}
                ORDER BY a.attendance_date DESC, a.subject ASC
                """,
                params,
            )
            return [
                StudentHistoryRow(
                    attendance_id=int(r["attendance_id"]),
                    subject=r["subject"],
                    attendance_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    teacher_name=r.get("teacher_name"),
                )
                for r in fetchall(cur)
            ]

    def subjects_for_student(self, student_id: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT subject FROM attendance WHERE student_id=%s ORDER BY subject",
                (int(student_id),),
            )
            return [r["subject"] for r in fetchall(cur)]
