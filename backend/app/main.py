"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.api.v1.endpoints.health import get_liveness
from app.api.v1.middleware import SecurityHeadersMiddleware, UnhandledErrorMiddleware
from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.exceptions import error_body, setup_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.db.session import close_db, init_db
from app.deps.di_container import build_container
from app.schemas.health import HealthResponse

logger = get_logger(__name__)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer throttled requests with the standard error envelope."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_body("Too many requests, please try again later"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Startup fails if the database cannot be reached.
    """
    settings: Settings = app.state.settings

    # Startup
    setup_logging(settings)
    await init_db(settings)
    logger.info(
        f"{settings.PROJECT_NAME} started in {settings.ENVIRONMENT} mode "
        f"(auth mode: {settings.AUTH_MODE})"
    )

    yield

    # Shutdown
    logger.info("Shutting down, closing database connections")
    await close_db()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Client records for freelancers, scoped to the authenticated user",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.container = build_container(settings)

    # Innermost: uncaught errors become envelopes before the outer middleware run
    app.add_middleware(UnhandledErrorMiddleware)

    # Rate limiting middleware
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security headers middleware
    app.add_middleware(SecurityHeadersMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-User-Id"],
    )

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Root-level liveness endpoint for load balancers
    app.add_api_route(
        "/health",
        get_liveness,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["health"],
    )

    # Global exception handlers
    setup_exception_handlers(app)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT_SECONDS,
    )


if __name__ == "__main__":
    run()
