# core/security.py
"""
Password hashing and the signed tokens that make up a user session.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

logger = logging.getLogger(__name__)

# JWT configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = getattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24)
REFRESH_TOKEN_EXPIRE_DAYS = getattr(settings, "REFRESH_TOKEN_EXPIRE_DAYS", 7)

_DEV_SECRET = "dev-secret-key-change-in-production"


def get_secret_key() -> str:
    """JWT signing key from settings, with a fixed key for local development."""
    secret = getattr(settings, "SECRET_KEY", None)
    if secret:
        return secret
    return _DEV_SECRET


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _encode(data: dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + lifetime
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to embed, at least ``sub`` (user id) and ``email``
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, "access", lifetime)


def create_refresh_token(data: dict[str, Any]) -> str:
    """Create a JWT refresh token with the longer refresh lifetime."""
    return _encode(data, "refresh", timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT. Returns the claims, or None when invalid or expired."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def verify_token_type(token: str, expected_type: str) -> dict[str, Any] | None:
    """Decode a token and require its ``type`` claim ('access' or 'refresh')."""
    payload = decode_token(token)
    if payload is None:
        return None
    if payload.get("type") != expected_type:
        return None
    return payload
