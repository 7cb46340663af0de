"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Identity tokens are valid for exactly 24 hours from issuance; not configurable.
TOKEN_LIFETIME = timedelta(hours=24)

# Min/max lengths for email and password validation.
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=4)
def dummy_password_hash(rounds: int = BCRYPT_ROUNDS) -> str:
    """A throwaway hash to verify against when no account matches, so both paths cost the same."""
    return hash_password("not-a-real-password", rounds=rounds)


def create_access_token(
    sub: int,
    role: str,
    settings: Settings,
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """Create a JWT access token with sub (account id), role, iat and exp. Returns (token, exp)."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + TOKEN_LIFETIME
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "iat": issued_at,
        "exp": expire,
    }
    token = jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    return token, expire


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.ExpiredSignatureError for expired tokens and jwt.PyJWTError otherwise.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively; store and look up the lower-cased form."""
    return email.strip().lower()
