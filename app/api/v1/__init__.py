"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, calendar, health, notifications, users
from app.schemas.errors import ErrorResponse

# Documented error bodies for authenticated routers.
_AUTH_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"], responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}})
router.include_router(users.router, prefix="/users", tags=["users"], responses={**_AUTH_ERRORS, 403: {"model": ErrorResponse}})
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"], responses={**_AUTH_ERRORS, 403: {"model": ErrorResponse}})
router.include_router(calendar.router, prefix="/calendar", tags=["calendar"], responses=_AUTH_ERRORS)
