from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from .capabilities import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """One-way salted hashes via werkzeug (its default method unless overridden)."""

    def __init__(self, method: Optional[str] = None):
        self._method = method

    def hash(self, password: str) -> str:
        if self._method:
            return generate_password_hash(password, method=self._method)
        return generate_password_hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hash values
            return False
