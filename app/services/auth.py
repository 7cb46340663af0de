"""
Credential issuer and token verifier.

Expected authentication outcomes (bad password, missing/expired/invalid token)
are returned as tagged results rather than raised; the API layer maps each
failure kind to its HTTP response. Only unexpected store errors propagate.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import (
    create_access_token,
    decode_access_token,
    dummy_password_hash,
    verify_password,
)
from app.models import User
from app.schemas.auth import IdentityContext, Role
from app.services.accounts import find_by_email, find_by_id

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class AuthFailure(str, Enum):
    """Why a login or token check did not produce an identity. Values are the public error codes."""

    VALIDATION_ERROR = "validation_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of authenticate(): exactly one of identity or failure is set."""

    identity: IdentityContext | None = None
    failure: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None

    @classmethod
    def success(cls, identity: IdentityContext) -> "AuthResult":
        return cls(identity=identity)

    @classmethod
    def fail(cls, failure: AuthFailure) -> "AuthResult":
        return cls(failure=failure)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of issue_token(): token, expiry and account on success, failure otherwise."""

    token: str | None = None
    expires_at: datetime | None = None
    user: User | None = None
    failure: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.token is not None


def issue_token(
    db: Session,
    settings: "Settings",
    email: str,
    password: str,
    now: datetime | None = None,
) -> LoginResult:
    """
    Check email/password and sign a 24h token for the account.

    Unknown email and wrong password both yield INVALID_CREDENTIALS, and both
    pay for one bcrypt comparison so timing does not reveal which case occurred.
    """
    if not email or not email.strip() or not password:
        return LoginResult(failure=AuthFailure.VALIDATION_ERROR)

    user = find_by_email(db, email)
    if user is None:
        verify_password(password, dummy_password_hash(settings.BCRYPT_ROUNDS))
        logger.info("Login failed: email_domain=%s", _email_domain(email))
        return LoginResult(failure=AuthFailure.INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: email_domain=%s", _email_domain(email))
        return LoginResult(failure=AuthFailure.INVALID_CREDENTIALS)

    token, expires_at = create_access_token(sub=user.id, role=user.role, settings=settings, now=now)
    _record_login(db, user, now or datetime.now(UTC))
    logger.info("Login succeeded: account_id=%s", user.id)
    return LoginResult(token=token, expires_at=expires_at, user=user)


def authenticate(
    db: Session,
    settings: "Settings",
    token: str | None,
) -> AuthResult:
    """
    Verify a bearer token and resolve it to the live account. None or blank is MISSING_TOKEN.

    Signature is checked before expiry, so an expired token is only reported as
    TOKEN_EXPIRED when it was genuinely issued with our secret. The returned
    identity carries the stored role, not the role claimed in the token.
    """
    token = (token or "").strip()
    if not token:
        return AuthResult.fail(AuthFailure.MISSING_TOKEN)

    try:
        payload = decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        return AuthResult.fail(AuthFailure.TOKEN_EXPIRED)
    except jwt.PyJWTError as e:
        logger.debug("Rejected token: %s", type(e).__name__)
        return AuthResult.fail(AuthFailure.INVALID_TOKEN)

    try:
        account_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return AuthResult.fail(AuthFailure.INVALID_TOKEN)

    user = find_by_id(db, account_id)
    if user is None:
        logger.debug("Token for missing account: account_id=%s", account_id)
        return AuthResult.fail(AuthFailure.INVALID_TOKEN)
    try:
        role = Role(user.role)
    except ValueError:
        logger.warning("Account has unknown role: account_id=%s, role=%s", user.id, user.role)
        return AuthResult.fail(AuthFailure.INVALID_TOKEN)

    return AuthResult.success(IdentityContext(account_id=user.id, role=role))


def require_role(identity: IdentityContext, role: Role) -> bool:
    """Strict equality; there is no role hierarchy."""
    return identity.role == role


def _record_login(db: Session, user: User, when: datetime) -> None:
    # last_login_at is telemetry only; a failed write must not fail the login.
    try:
        user.last_login_at = when
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not record last login: account_id=%s", user.id, exc_info=True)


def _email_domain(email: str) -> str:
    return email.rpartition("@")[2].strip().lower() or "-"
