"""Schemas for profile, password and settings endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.auth import UserOut

ProfileVisibility = Literal["public", "friends", "private"]


class ProfileUpdate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class ProfileResponse(BaseModel):
    message: str
    user: UserOut


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class SettingsOut(BaseModel):
    """Current preferences; defaults are returned when the user has no settings row yet."""

    model_config = ConfigDict(from_attributes=True)

    profile_visibility: ProfileVisibility = "public"
    email_notifications: bool = True
    app_notifications: bool = True


class NotificationSettingsUpdate(BaseModel):
    email_notifications: bool
    app_notifications: bool


class PrivacySettingsUpdate(BaseModel):
    profile_visibility: ProfileVisibility


class SettingsResponse(BaseModel):
    message: str
    settings: SettingsOut
