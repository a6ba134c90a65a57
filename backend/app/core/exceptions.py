"""
Application exceptions and the global exception handlers.
Every error leaves the API in the same envelope: {"status": "error", "message", "errors"?}.
"""

import logging
import traceback
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationException(AppException):
    """Malformed or out-of-range input (400)."""
    def __init__(self, message: str = "Validation failed", details: Optional[List[dict]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class AuthenticationException(AppException):
    """Missing, invalid or expired credentials (401)."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class NotFoundException(AppException):
    """Resource absent, or owned by another user (404)."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InternalServerException(AppException):
    """Unexpected store or consistency fault (500)."""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_body(message: str, errors: Optional[List[dict]] = None, **extra: Any) -> dict:
    """Build the error envelope."""
    body = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.details),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routing or by FastAPI itself."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = f"Route {request.url.path} not found"

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


def _serialize_validation_errors(errors: list) -> List[dict]:
    """Flatten pydantic errors into [{field, message}]."""
    serialized = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        field = ".".join(str(part) for part in loc)
        serialized.append({"field": field, "message": str(error.get("msg", "Invalid value"))})
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", serialized_errors),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    settings = request.app.state.settings
    if settings.is_production:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Something went wrong"),
        )

    extra = {}
    if settings.ENVIRONMENT == "development":
        extra["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(str(exc) or type(exc).__name__, **extra),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
