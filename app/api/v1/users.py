"""Profile, password, settings and user-list endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings
from app.api.errors import api_error
from app.api.v1.auth import get_identity, require_admin
from app.core.config import Settings
from app.core.database import get_db
from app.models import User
from app.schemas.auth import IdentityContext, MessageResponse, UserListItem, UserOut, UsersListResponse
from app.schemas.users import (
    ChangePasswordRequest,
    NotificationSettingsUpdate,
    PrivacySettingsUpdate,
    ProfileResponse,
    ProfileUpdate,
    SettingsOut,
    SettingsResponse,
)
from app.services import accounts, user_settings

router = APIRouter()


def _current_user(db: Session, identity: IdentityContext) -> User:
    user = accounts.find_by_id(db, identity.account_id)
    if user is None:
        raise api_error(status.HTTP_404_NOT_FOUND, "not_found", "User not found")
    return user


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[IdentityContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all accounts (admin only)."""
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in accounts.list_accounts(db)]
    )


@router.get("/directory", response_model=list[UserListItem])
def user_directory(
    _identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserListItem]:
    """Accounts ordered by name, for picking assignees."""
    return [UserListItem.model_validate(u) for u in accounts.directory(db)]


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    user = _current_user(db, identity)
    try:
        user = accounts.update_profile(
            db,
            user,
            first_name=body.first_name.strip(),
            last_name=body.last_name.strip(),
            email=body.email,
        )
    except accounts.EmailTakenError as e:
        raise api_error(status.HTTP_409_CONFLICT, "conflict", e.message) from e
    return ProfileResponse(message="Profile updated.", user=UserOut.model_validate(user))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    user = _current_user(db, identity)
    try:
        accounts.change_password(
            db,
            user,
            current_password=body.current_password,
            new_password=body.new_password,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except accounts.InvalidPasswordError as e:
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid_password", e.message) from e
    return MessageResponse(message="Password changed.")


@router.get("/settings", response_model=SettingsOut)
def get_settings(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> SettingsOut:
    return user_settings.read_settings(db, identity)


@router.put("/notification-settings", response_model=SettingsResponse)
def update_notification_settings(
    body: NotificationSettingsUpdate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> SettingsResponse:
    settings = user_settings.update_settings(
        db,
        identity,
        email_notifications=body.email_notifications,
        app_notifications=body.app_notifications,
    )
    return SettingsResponse(message="Notification settings updated.", settings=settings)


@router.put("/privacy-settings", response_model=SettingsResponse)
def update_privacy_settings(
    body: PrivacySettingsUpdate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> SettingsResponse:
    settings = user_settings.update_settings(
        db, identity, profile_visibility=body.profile_visibility
    )
    return SettingsResponse(message="Privacy settings updated.", settings=settings)
