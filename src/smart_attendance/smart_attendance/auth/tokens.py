from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_JWT_ALGORITHM, DEFAULT_TOKEN_DAYS
from ..core.enums import Role
from ..core.exceptions import InvalidTokenError, TokenExpiredError
from .capabilities import TokenClaims, TokenCodec


class JWTTokenCodec(TokenCodec):
    """Signed session credentials carrying ``{id, email, role}``."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = DEFAULT_JWT_ALGORITHM,
        ttl: timedelta = timedelta(days=DEFAULT_TOKEN_DAYS),
        clock: Callable[[], datetime] = now_utc,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, *, actor_id: int, email: str, role: Role) -> str:
        issued_at = self._clock()
        payload = {
            "id": int(actor_id),
            "email": email,
            "role": role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token expired.")
        except jwt.InvalidTokenError:
            raise InvalidTokenError("Invalid token.")

        try:
            return TokenClaims(actor_id=int(payload["id"]), role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError("Invalid token.")
