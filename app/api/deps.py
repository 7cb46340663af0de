"""Shared FastAPI dependencies."""

from fastapi import Request

from app.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (read-only for the life of the process)."""
    return request.app.state.settings
