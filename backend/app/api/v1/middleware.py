"""
API middleware for authentication and common concerns.
Centralized authentication enforcement for all protected routes.

Two authenticators exist; exactly one is selected at startup from AUTH_MODE:
- BearerTokenAuthenticator: verifies a signed JWT (the only mode allowed in production)
- HeaderAuthenticator: trusts the X-User-Id header, for local development only
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.exceptions import (
    AuthenticationException,
    InternalServerException,
    app_exception_handler,
    general_exception_handler,
)
from app.core.logging import get_logger
from app.core.security import decode_access_token

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)

USER_ID_HEADER = "X-User-Id"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity trusted for the rest of the request."""
    user_id: str
    email: Optional[str] = None


class BearerTokenAuthenticator:
    """Authenticate with `Authorization: Bearer <jwt>`."""

    def __init__(self, secret_key: str, algorithm: str):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def authenticate(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials],
    ) -> AuthenticatedUser:
        if credentials is None or credentials.scheme.lower() != "bearer":
            raise AuthenticationException("No authentication token provided")

        payload = decode_access_token(credentials.credentials, self.secret_key, self.algorithm)

        user_id = payload.get("userId") or payload.get("sub")
        if not user_id:
            raise AuthenticationException("Invalid token")

        return AuthenticatedUser(user_id=str(user_id), email=payload.get("email"))


class HeaderAuthenticator:
    """Development-only: the caller names its own identity in X-User-Id."""

    def authenticate(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials],
    ) -> AuthenticatedUser:
        user_id = request.headers.get(USER_ID_HEADER)
        if not user_id:
            raise AuthenticationException(f"Missing {USER_ID_HEADER} header")
        return AuthenticatedUser(user_id=user_id)


async def require_authentication(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """
    Centralized authentication dependency.
    This should be used as a dependency on all protected routes.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            current_user: AuthenticatedUser = Depends(require_authentication)
        ):
            ...

    Returns:
        The authenticated identity

    Raises:
        AuthenticationException: If authentication fails
    """
    authenticator = request.app.state.container.authenticator()
    user = authenticator.authenticate(request, credentials)
    request.state.user = user
    return user


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds browser security headers to every API response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"

        path = request.url.path
        if not (path.startswith("/docs") or path.startswith("/redoc")):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
            response.headers["Cache-Control"] = "no-store"

        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns errors no route handler dealt with into the 500 envelope.
    Installed innermost, so CORS and security headers still wrap the response.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except SQLAlchemyError as exc:
            logger.exception(
                "Database error",
                extra={"path": request.url.path, "exception_type": type(exc).__name__},
            )
            return await app_exception_handler(
                request, InternalServerException("Database operation failed")
            )
        except Exception as exc:
            return await general_exception_handler(request, exc)
