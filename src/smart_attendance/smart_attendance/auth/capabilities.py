"""Collaborator interfaces for the hashing and token primitives.

Services depend on these protocols; concrete adapters live in
``passwords.py`` and ``tokens.py``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.enums import Role


@dataclass(frozen=True)
class TokenClaims:
    actor_id: int
    role: Role


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, password_hash: str, password: str) -> bool:
        raise NotImplementedError


class TokenCodec(Protocol):
    def issue(self, *, actor_id: int, email: str, role: Role) -> str:
        raise NotImplementedError

    def decode(self, token: str) -> TokenClaims:
        """Raise InvalidTokenError / TokenExpiredError on a bad credential."""

        raise NotImplementedError
