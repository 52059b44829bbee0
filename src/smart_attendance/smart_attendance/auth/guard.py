from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ActorNotFoundError, RoleMismatchError, UnauthenticatedError
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository
from .capabilities import TokenCodec
from .service import Actor

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization`` header value, if any.

    A bare ``Bearer`` scheme with nothing after it counts as no token.
    """
    if not authorization:
        return None
    value = authorization.lstrip()
    if value.startswith(BEARER_PREFIX) or value.rstrip() == BEARER_PREFIX.strip():
        value = value[len(BEARER_PREFIX):]
    return value.strip() or None


class AccessGuard:
    """Turns an inbound credential into a live actor for one route role.

    Claims only select the actor; the record itself is always re-read from
    the store, so deleted actors are rejected on their next request.
    """

    def __init__(self, tokens: TokenCodec, teachers: TeacherRepository, students: StudentRepository):
        self._tokens = tokens
        self._teachers = teachers
        self._students = students

    def authenticate(self, role: Role, authorization: Optional[str]) -> Actor:
        token = extract_bearer_token(authorization)
        if not token:
            raise UnauthenticatedError("Access denied. No token provided.")

        claims = self._tokens.decode(token)
        if claims.role != role:
            raise RoleMismatchError(f"Access denied. {role.label} token required.")

        if role == Role.TEACHER:
            actor: Optional[Actor] = self._teachers.get_by_id(claims.actor_id)
        else:
            actor = self._students.get_by_id(claims.actor_id)

        if actor is None:
            raise ActorNotFoundError(f"Invalid token. {role.label} not found.")
        return actor
