from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..common.validators import require_fields, require_int
from ..core.enums import Role
from ..core.exceptions import DuplicateEmailError, InvalidCredentialsError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository
from .capabilities import PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)

Actor = Union[Teacher, Student]

INVALID_LOGIN_MESSAGE = "Invalid email or password"

REGISTRATION_FIELDS = {
    Role.TEACHER: ("name", "email", "password", "subject"),
    Role.STUDENT: ("name", "email", "password", "branch", "year"),
}


@dataclass(frozen=True)
class AuthResult:
    """Actor plus a freshly issued session credential."""

    actor: Actor
    token: str

    def to_dict(self) -> dict:
        return {self.actor.role.value: self.actor.public_view(), "token": self.token}


class IdentityService:
    """Use case: register and log in students and teachers."""

    def __init__(
        self,
        teachers: TeacherRepository,
        students: StudentRepository,
        *,
        hasher: PasswordHasher,
        tokens: TokenCodec,
    ):
        self._teachers = teachers
        self._students = students
        self._hasher = hasher
        self._tokens = tokens

    def _issue(self, actor: Actor) -> str:
        return self._tokens.issue(actor_id=actor.actor_id, email=actor.email, role=actor.role)

    def _find_by_email(self, role: Role, email: str) -> Optional[Actor]:
        if role == Role.TEACHER:
            return self._teachers.get_by_email(email)
        return self._students.get_by_email(email)

    def register(self, role: Role, profile: Mapping[str, Any]) -> AuthResult:
        data = require_fields(profile, REGISTRATION_FIELDS[role])
        name = str(data["name"]).strip()
        email = str(data["email"]).strip()
        password = str(data["password"])

        if self._find_by_email(role, email):
            raise DuplicateEmailError(f"{role.label} with this email already exists")

        password_hash = self._hasher.hash(password)
        if role == Role.TEACHER:
            actor: Actor = self._teachers.create(
                name=name,
                email=email,
                password_hash=password_hash,
                subject=str(data["subject"]).strip(),
            )
        else:
            year = require_int(data["year"], "year")
            if year < 1:
                raise ValidationError("year must be a positive integer")
            actor = self._students.create(
                name=name,
                email=email,
                password_hash=password_hash,
                branch=str(data["branch"]).strip(),
                year=year,
            )

        logger.info("Registered %s id=%s", role.value, actor.actor_id)
        return AuthResult(actor=actor, token=self._issue(actor))

    def login(self, role: Role, email: Optional[str], password: Optional[str]) -> AuthResult:
        if not email or not str(email).strip() or not password:
            raise ValidationError("Email and password are required")

        actor = self._find_by_email(role, str(email).strip())
        # Same error for unknown email and wrong password.
        if actor is None or not self._hasher.verify(actor.password_hash, str(password)):
            logger.warning("Failed %s login", role.value)
            raise InvalidCredentialsError(INVALID_LOGIN_MESSAGE)

        logger.info("%s id=%s logged in", role.label, actor.actor_id)
        return AuthResult(actor=actor, token=self._issue(actor))
