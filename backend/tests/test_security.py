"""
Tests for password hashing and access tokens.
"""
import jwt
import pytest

from app.core.config import settings
from app.core.security import (
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


def test_password_roundtrip():
    hashed = hash_password("s3cret!")

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("s3cret!", "not-an-argon2-hash") is False


def test_access_token_claims():
    token = create_access_token(user_id="abc", role="agent", insurance_provider_id="acme-health")

    claims = verify_access_token(token)

    assert claims["sub"] == "abc"
    assert claims["role"] == "agent"
    assert claims["insurance_provider_id"] == "acme-health"
    assert claims["type"] == "access"
    assert claims["jti"]


def test_tampered_token_rejected():
    token = create_access_token(user_id="abc", role="user")

    with pytest.raises(jwt.InvalidTokenError):
        verify_access_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))


def test_non_access_token_rejected():
    token = jwt.encode({"sub": "abc", "type": "refresh"}, settings.JWT_SECRET, algorithm="HS256")

    with pytest.raises(jwt.InvalidTokenError):
        verify_access_token(token)
