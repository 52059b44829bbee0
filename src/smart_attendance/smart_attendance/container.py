from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.capabilities import PasswordHasher, TokenCodec
from .auth.guard import AccessGuard
from .auth.passwords import WerkzeugPasswordHasher
from .auth.service import IdentityService
from .auth.tokens import JWTTokenCodec
from .core.constants import DEFAULT_JWT_ALGORITHM, DEFAULT_POOL_SIZE, DEFAULT_TOKEN_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teachers_repo: TeacherRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    identity_service: IdentityService
    access_guard: AccessGuard
    student_service: StudentService
    attendance_service: AttendanceService


def assemble(
    *,
    teachers_repo: TeacherRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    hasher: PasswordHasher,
    tokens: TokenCodec,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of already-built repositories and primitives."""
    return Container(
        conn=conn,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        identity_service=IdentityService(teachers_repo, students_repo, hasher=hasher, tokens=tokens),
        access_guard=AccessGuard(tokens, teachers_repo, students_repo),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM,
    token_days: int = DEFAULT_TOKEN_DAYS,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config), pool_size=pool_size).open()

    return assemble(
        teachers_repo=MySQLTeacherRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        hasher=WerkzeugPasswordHasher(),
        tokens=JWTTokenCodec(jwt_secret, algorithm=jwt_algorithm, ttl=timedelta(days=int(token_days))),
        conn=conn,
    )
