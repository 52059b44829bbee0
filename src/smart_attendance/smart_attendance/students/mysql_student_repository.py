from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateEmailError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import RosterEntry, Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, email, password_hash, branch, year, created_at"


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        branch=row["branch"],
        year=int(row["year"]),
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(self, *, name: str, email: str, password_hash: str, branch: str, year: int) -> Student:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(name, email, password_hash, branch, year)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, branch, int(year)),
                )
                student_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
                return _to_student(fetchone(cur))
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateEmailError("Student with this email already exists") from e
            raise

    def list_roster(self) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id, name, email, branch, year FROM students ORDER BY name, student_id")
            return [
                RosterEntry(
                    student_id=int(r["student_id"]),
                    name=r["name"],
                    email=r["email"],
                    branch=r["branch"],
                    year=int(r["year"]),
                )
                for r in fetchall(cur)
            ]
