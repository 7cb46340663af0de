"""Request/response schemas for auth endpoints and the per-request identity."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class Role(str, Enum):
    """Flat role enumeration; no hierarchy between roles."""

    USER = "user"
    ADMIN = "admin"


class IdentityContext(BaseModel):
    """
    Who is asking, resolved from a verified token against the live account store.

    Produced once per request by the auth guard and passed to handlers as a parameter.
    It is the only trusted source of the requester's id and role.
    """

    model_config = ConfigDict(frozen=True)

    account_id: int
    role: Role


class LoginRequest(BaseModel):
    """Credentials for login. Only presence is validated; wrong values are InvalidCredentials."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be blank.")
        return v


class RegisterRequest(BaseModel):
    """New account details."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UserOut(BaseModel):
    """Public view of an account (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    email_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TokenResponse(BaseModel):
    """JWT access token and the account it identifies, returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Token expiry (UTC), 24h after issuance")
    user: UserOut


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class UserListItem(BaseModel):
    """User entry for lists (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserListItem]
