from __future__ import annotations

import pytest

from src.smart_attendance.smart_attendance.attendance.service import AttendanceService
from src.smart_attendance.smart_attendance.auth.guard import AccessGuard
from src.smart_attendance.smart_attendance.auth.service import IdentityService
from src.smart_attendance.smart_attendance.auth.tokens import JWTTokenCodec
from src.smart_attendance.smart_attendance.container import assemble
from src.smart_attendance.smart_attendance.main import create_app

from tests.fakes import InMemoryAttendance, InMemoryStudents, InMemoryTeachers, PlainHasher


@pytest.fixture
def teachers():
    return InMemoryTeachers()


@pytest.fixture
def students():
    return InMemoryStudents()


@pytest.fixture
def attendance_repo(students, teachers):
    return InMemoryAttendance(students, teachers)


@pytest.fixture
def tokens():
    return JWTTokenCodec("unit-test-secret")


@pytest.fixture
def identity(teachers, students, tokens):
    return IdentityService(teachers, students, hasher=PlainHasher(), tokens=tokens)


@pytest.fixture
def guard(tokens, teachers, students):
    return AccessGuard(tokens, teachers, students)


@pytest.fixture
def ledger(attendance_repo, students):
    return AttendanceService(attendance_repo, students)


@pytest.fixture
def math_teacher(teachers):
    return teachers.create(name="Alice", email="alice@school.test", password_hash="hashed:pw", subject="Math")


@pytest.fixture
def app(teachers, students, attendance_repo, tokens):
    container = assemble(
        teachers_repo=teachers,
        students_repo=students,
        attendance_repo=attendance_repo,
        hasher=PlainHasher(),
        tokens=tokens,
    )
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
