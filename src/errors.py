"""Application errors and the handlers that render them as JSON."""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, details: Any = None, clear_cookies: tuple[str, ...] = ()) -> None:
        super().__init__(details)
        self.details = details
        # Cookies to expire on the error response
        self.clear_cookies = clear_cookies

    def to_body(self) -> dict[str, Any]:
        return {"error": self.code, "details": self.details}


class Unauthenticated(AppError):
    """No token, an unusable token, or a token whose subject is gone."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class Conflict(AppError):
    """A unique key (email, per-user category name) is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "conflict"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError."""
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    response = JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)
    for name in exc.clear_cookies:
        response.delete_cookie(name)
    return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the same shape."""
    try:
        code = HTTPStatus(exc.status_code).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        code = "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": code, "details": exc.detail},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as a 400 with one entry per field."""
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
                "type": error["type"],
            }
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationFailed.code, "details": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide internals outside development."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    settings = get_settings()
    details = str(exc) if settings.is_development else "An unexpected error occurred"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": AppError.code, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
