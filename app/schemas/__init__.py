"""Pydantic request/response schemas."""

from app.schemas.auth import (
    IdentityContext,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    Role,
    TokenResponse,
    UserListItem,
    UserOut,
    UsersListResponse,
)
from app.schemas.calendar import CalendarEventIn, CalendarEventOut
from app.schemas.errors import ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.notifications import NotificationCreate, NotificationOut

__all__ = [
    "CalendarEventIn",
    "CalendarEventOut",
    "ErrorResponse",
    "HealthResponse",
    "IdentityContext",
    "LoginRequest",
    "MessageResponse",
    "NotificationCreate",
    "NotificationOut",
    "RegisterRequest",
    "RegisterResponse",
    "Role",
    "TokenResponse",
    "UserListItem",
    "UserOut",
    "UsersListResponse",
]
