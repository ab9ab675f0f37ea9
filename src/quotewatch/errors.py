"""Application error taxonomy and the exception handlers that render it.

Every error leaves the API as `{"success": false, "error": <message>, ...extra}`.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base for errors that map to a specific HTTP status and user-facing message."""

    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        **extra: Any,
    ) -> None:
        self.message = message or self.message
        self.headers = headers
        self.extra = extra
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(", ".join(errors))


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class DuplicateEmailError(AppError):
    status_code = 409
    message = "This email address is already in use"


class DuplicateFavoriteError(AppError):
    status_code = 409
    message = "This stock is already in your favorites"


class InvalidCredentialsError(AppError):
    status_code = 401
    message = "Invalid email or password"


class AuthError(AppError):
    """Failures of the authentication chain (all 401)."""

    status_code = 401
    message = "Authentication required"


class MissingTokenError(AuthError):
    message = "Authentication token required"


class TokenInvalidError(AuthError):
    message = "Invalid token"


class TokenExpiredError(AuthError):
    message = "Session expired, please log in again"


class UserNotFoundError(AuthError):
    message = "User not found"


class PolicyError(AppError):
    """Authorization policy rejections; always flag that premium lifts them."""

    status_code = 403

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        super().__init__(message, premium_required=True, **extra)


class PremiumRequiredError(PolicyError):
    message = "Premium subscription required"


class QuotaExceededError(PolicyError):
    def __init__(self, current_count: int, limit: int) -> None:
        super().__init__(
            f"Limit of {limit} favorites reached for free accounts",
            current_count=current_count,
            limit=limit,
        )


class TooManyAttemptsError(AppError):
    status_code = 429
    message = "Too many attempts, please try again later"

    def __init__(self, message: str | None = None, retry_after: int = 0) -> None:
        super().__init__(message, headers={"Retry-After": str(max(retry_after, 1))})


def _error_response(
    status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.to_body(), exc.headers)


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        detail = "Route not found"
    else:
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(
        exc.status_code,
        {"success": False, "error": detail},
        getattr(exc, "headers", None),
    )


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return _error_response(400, {"success": False, "error": ", ".join(messages)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc
    )
    return _error_response(500, {"success": False, "error": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope for every failure path, including uncaught exceptions."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
