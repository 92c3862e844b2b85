"""Security utilities: password hashing and JWT access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

_password_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """Hash a plain password using Argon2."""
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a plain password against a hash."""
    try:
        _password_hasher.verify(password_hash, plain_password)
        return True
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError) as e:
        logger.warning(f"Password verification error: {e}")
        return False


def create_access_token(
    user_id: str,
    role: str,
    insurance_provider_id: str | None = None,
) -> str:
    """Create a JWT access token.

    Agents carry their provider binding in the ``insurance_provider_id`` claim
    so the frontend can scope its views without an extra profile request.
    """
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET must be set")

    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "role": role,
        "insurance_provider_id": insurance_provider_id,
        "iat": now,
        "exp": expire,
        "jti": str(uuid4()),
        "type": "access",
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT access token."""
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET must be set")

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except jwt.ExpiredSignatureError:
        raise jwt.InvalidTokenError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {e}") from e

    if payload.get("type") != "access":
        raise jwt.InvalidTokenError("Token is not an access token")
    return payload
