"""Error mapping: every failure leaves the API as {"error", "message", ...} with the right status."""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services.auth import AuthFailure
from app.services.ownership import ResourceNotFound

logger = logging.getLogger(__name__)

# Fallback codes for HTTPExceptions raised with a plain string detail.
_STATUS_CODES = {
    400: "validation_error",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    500: "internal_error",
}

_AUTH_MESSAGES = {
    AuthFailure.VALIDATION_ERROR: "Email and password are required.",
    AuthFailure.INVALID_CREDENTIALS: "Invalid email or password.",
    AuthFailure.MISSING_TOKEN: "Not authenticated",
    AuthFailure.INVALID_TOKEN: "Invalid token",
    AuthFailure.TOKEN_EXPIRED: "Token has expired",
}


def api_error(
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: object,
) -> HTTPException:
    """Build an HTTPException whose body is the uniform error payload."""
    detail = {"error": code, "message": message, **extra}
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def auth_failure_error(failure: AuthFailure) -> HTTPException:
    """Map an authentication failure kind to its HTTP error (400 or 401)."""
    message = _AUTH_MESSAGES[failure]
    if failure is AuthFailure.VALIDATION_ERROR:
        return api_error(status.HTTP_400_BAD_REQUEST, failure.value, message)
    if failure is AuthFailure.INVALID_CREDENTIALS:
        return api_error(status.HTTP_401_UNAUTHORIZED, failure.value, message)
    if failure is AuthFailure.MISSING_TOKEN:
        challenge = "Bearer"
    else:
        challenge = f'Bearer error="invalid_token", error_description="{message}"'
    return api_error(
        status.HTTP_401_UNAUTHORIZED,
        failure.value,
        message,
        headers={"WWW-Authenticate": challenge},
        expired=failure is AuthFailure.TOKEN_EXPIRED,
    )


def not_found(resource: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, "not_found", f"{resource} not found")


def forbidden(message: str = "Admin access required") -> HTTPException:
    return api_error(status.HTTP_403_FORBIDDEN, "forbidden", message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        body = exc.detail
    else:
        body = {
            "error": _STATUS_CODES.get(exc.status_code, "error"),
            "message": str(exc.detail),
        }
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "message": "Invalid request.",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def _not_found_handler(request: Request, exc: ResourceNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "not_found", "message": exc.message},
    )


async def _store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Details stay in the server log; the client only learns that something failed.
    logger.exception(
        "Store failure: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "Internal server error."},
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(ResourceNotFound, _not_found_handler)
    app.add_exception_handler(SQLAlchemyError, _store_failure_handler)
