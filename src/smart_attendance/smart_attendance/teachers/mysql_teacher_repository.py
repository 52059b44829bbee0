from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import DuplicateEmailError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "teacher_id, name, email, password_hash, subject, created_at"


def _to_teacher(row: dict) -> Teacher:
    return Teacher(
        teacher_id=int(row["teacher_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        subject=row["subject"],
        created_at=row.get("created_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def get_by_email(self, email: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def create(self, *, name: str, email: str, password_hash: str, subject: str) -> Teacher:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO teachers(name, email, password_hash, subject)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, subject),
                )
                teacher_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (teacher_id,))
                return _to_teacher(fetchone(cur))
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateEmailError("Teacher with this email already exists") from e
            raise
