"""
Token and password helper tests.
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.exceptions import AuthenticationException
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


def test_token_round_trip_carries_identity():
    token = create_access_token({"userId": "user-1", "email": "a@b.com"}, SECRET)

    payload = decode_access_token(token, SECRET)

    assert payload["userId"] == "user-1"
    assert payload["sub"] == "user-1"
    assert payload["email"] == "a@b.com"
    assert isinstance(payload["exp"], int)


def test_expired_token_is_rejected():
    token = create_access_token({"userId": "user-1"}, SECRET, expires_delta=timedelta(seconds=-1))

    with pytest.raises(AuthenticationException) as exc_info:
        decode_access_token(token, SECRET)

    assert exc_info.value.message == "Token expired"
    assert exc_info.value.status_code == 401


def test_token_signed_with_other_secret_is_invalid():
    token = create_access_token({"userId": "user-1"}, "someone-else")

    with pytest.raises(AuthenticationException) as exc_info:
        decode_access_token(token, SECRET)

    assert exc_info.value.message == "Invalid token"


def test_token_with_unexpected_algorithm_is_invalid():
    token = jwt.encode({"userId": "user-1"}, SECRET, algorithm="HS512")

    with pytest.raises(AuthenticationException):
        decode_access_token(token, SECRET, algorithm="HS256")


def test_password_hashing():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
