from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.smart_attendance.smart_attendance.auth.passwords import WerkzeugPasswordHasher
from src.smart_attendance.smart_attendance.auth.tokens import JWTTokenCodec
from src.smart_attendance.smart_attendance.core.enums import Role
from src.smart_attendance.smart_attendance.core.exceptions import InvalidTokenError


def test_token_carries_id_email_role_and_seven_day_window():
    issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
    codec = JWTTokenCodec("s3cret", clock=lambda: issued)

    token = codec.issue(actor_id=5, email="a@b.c", role=Role.TEACHER)
    payload = jwt.decode(token, "s3cret", algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False})

    assert payload["id"] == 5
    assert payload["email"] == "a@b.c"
    assert payload["role"] == "teacher"
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_unknown_role_claim_is_invalid():
    token = jwt.encode(
        {"id": 1, "role": "admin", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "s3cret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        JWTTokenCodec("s3cret").decode(token)


def test_token_without_expiry_is_invalid():
    token = jwt.encode({"id": 1, "role": "student"}, "s3cret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        JWTTokenCodec("s3cret").decode(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        JWTTokenCodec("")


def test_werkzeug_hasher_round_trip():
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    hashed = hasher.hash("pw123")

    assert hashed != "pw123"
    assert hasher.verify(hashed, "pw123")
    assert not hasher.verify(hashed, "wrong")
    assert not hasher.verify("CHANGE_ME", "pw123")
