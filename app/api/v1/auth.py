"""JWT login/registration and auth dependencies (get_identity, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings
from app.api.errors import api_error, auth_failure_error, forbidden
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import (
    IdentityContext,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    Role,
    TokenResponse,
    UserOut,
)
from app.services.accounts import EmailTakenError, create_account, find_by_id
from app.services.auth import authenticate, issue_token, require_role

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> IdentityContext:
    """Dependency: require a valid Bearer JWT for a live account. Raises 401 otherwise."""
    token = credentials.credentials if credentials else None
    result = authenticate(db, settings, token)
    if not result.ok:
        raise auth_failure_error(result.failure)
    return result.identity


def require_admin(
    identity: Annotated[IdentityContext, Depends(get_identity)],
) -> IdentityContext:
    """Dependency: require authenticated identity with role 'admin'. Raises 403 for non-admin."""
    if not require_role(identity, Role.ADMIN):
        raise forbidden()
    return identity


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """Create a 'user' account. No token is returned; the client logs in afterwards."""
    try:
        user = create_account(
            db,
            email=body.email,
            password=body.password,
            first_name=body.first_name.strip(),
            last_name=body.last_name.strip(),
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except EmailTakenError as e:
        raise api_error(status.HTTP_409_CONFLICT, "conflict", e.message) from e
    return RegisterResponse(message="Registration successful.", user=UserOut.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT valid for 24 hours.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = issue_token(db, settings, body.email, body.password)
    if not result.ok:
        raise auth_failure_error(result.failure)
    return TokenResponse(
        token=result.token,
        token_type="bearer",
        expires_at=result.expires_at,
        user=UserOut.model_validate(result.user),
    )


@router.get("/me", response_model=UserOut)
def me(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Current account, read fresh from the store."""
    user = find_by_id(db, identity.account_id)
    if user is None:
        raise api_error(status.HTTP_404_NOT_FOUND, "not_found", "User not found")
    return UserOut.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    identity: Annotated[IdentityContext, Depends(get_identity)],
) -> MessageResponse:
    """
    Acknowledge logout. Tokens are not revoked server-side: the client discards
    its token, which otherwise stays valid until it expires.
    """
    logger.info("Logout: account_id=%s", identity.account_id)
    return MessageResponse(message="Logged out.")
