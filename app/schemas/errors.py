"""Error body returned by every failing endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Uniform error payload: a stable machine code plus a human-readable message."""

    error: str = Field(..., description="Stable error code, e.g. token_expired")
    message: str
    expired: bool = Field(
        default=False,
        description="True only for token_expired, so clients can re-authenticate silently",
    )
    details: list[Any] | None = None
