from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.smart_attendance.smart_attendance.auth.guard import extract_bearer_token
from src.smart_attendance.smart_attendance.auth.tokens import JWTTokenCodec
from src.smart_attendance.smart_attendance.core.enums import Role
from src.smart_attendance.smart_attendance.core.exceptions import (
    ActorNotFoundError,
    InvalidTokenError,
    RoleMismatchError,
    TokenExpiredError,
    UnauthenticatedError,
)


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token("Bearer") is None
    assert extract_bearer_token("  Bearer   ") is None
    assert extract_bearer_token(None) is None


def test_empty_bearer_header_is_unauthenticated(guard):
    with pytest.raises(UnauthenticatedError) as exc:
        guard.authenticate(Role.STUDENT, "Bearer ")

    assert str(exc.value) == "Access denied. No token provided."


def test_missing_token_is_unauthenticated(guard):
    with pytest.raises(UnauthenticatedError) as exc:
        guard.authenticate(Role.STUDENT, None)

    assert str(exc.value) == "Access denied. No token provided."


def test_garbled_token_is_invalid(guard):
    with pytest.raises(InvalidTokenError):
        guard.authenticate(Role.STUDENT, "Bearer not-a-jwt")


def test_token_signed_with_other_secret_is_invalid(guard, students):
    student = students.add_with_id(7, "Bob")
    forged = JWTTokenCodec("other-secret").issue(actor_id=student.student_id, email=student.email, role=Role.STUDENT)

    with pytest.raises(InvalidTokenError):
        guard.authenticate(Role.STUDENT, f"Bearer {forged}")


def test_expired_token(guard, students):
    student = students.add_with_id(7, "Bob")
    long_ago = datetime.now(timezone.utc) - timedelta(days=30)
    stale = JWTTokenCodec("unit-test-secret", clock=lambda: long_ago).issue(
        actor_id=student.student_id, email=student.email, role=Role.STUDENT
    )

    with pytest.raises(TokenExpiredError) as exc:
        guard.authenticate(Role.STUDENT, f"Bearer {stale}")

    assert str(exc.value) == "Token expired."


def test_teacher_token_on_student_route_is_role_mismatch(guard, tokens, math_teacher):
    token = tokens.issue(actor_id=math_teacher.teacher_id, email=math_teacher.email, role=Role.TEACHER)

    with pytest.raises(RoleMismatchError) as exc:
        guard.authenticate(Role.STUDENT, f"Bearer {token}")

    assert exc.value.status_code == 403
    assert str(exc.value) == "Access denied. Student token required."


def test_deleted_actor_is_rejected(guard, tokens, students):
    student = students.add_with_id(7, "Bob")
    token = tokens.issue(actor_id=7, email=student.email, role=Role.STUDENT)
    students.delete(7)

    with pytest.raises(ActorNotFoundError) as exc:
        guard.authenticate(Role.STUDENT, f"Bearer {token}")

    assert str(exc.value) == "Invalid token. Student not found."


def test_valid_token_resolves_fresh_actor(guard, tokens, math_teacher):
    token = tokens.issue(actor_id=math_teacher.teacher_id, email=math_teacher.email, role=Role.TEACHER)

    actor = guard.authenticate(Role.TEACHER, f"Bearer {token}")

    assert actor == math_teacher
