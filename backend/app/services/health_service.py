"""
Health service.
Provides health check functionality.
"""

import time
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from app.db import session as db_session
from app.db.repositories.health_repository import HealthRepository
from app.schemas.health import HealthResponse


class HealthService:
    """Service for health check operations."""

    def __init__(self, environment: str):
        self.environment = environment
        self.start_time = time.monotonic()

    def uptime(self) -> float:
        return round(time.monotonic() - self.start_time, 3)

    async def get_liveness(self) -> HealthResponse:
        """Process-level status; never touches the database."""
        return HealthResponse(
            status="ok",
            uptime=self.uptime(),
            timestamp=datetime.now(timezone.utc),
            environment=self.environment,
        )

    async def get_health(self) -> HealthResponse:
        """
        Get system health status including a database probe.

        Returns:
            HealthResponse with status "ok" or "degraded"
        """
        checks = {}

        if db_session.async_session_maker is None:
            checks["database"] = "error: not initialized"
        else:
            try:
                async with db_session.async_session_maker() as session:
                    repo = HealthRepository(session=session)
                    checks["database"] = "ok" if await repo.check_database() else "error"
            except SQLAlchemyError as e:
                checks["database"] = f"error: {str(e)}"

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            uptime=self.uptime(),
            timestamp=datetime.now(timezone.utc),
            environment=self.environment,
            checks=checks,
        )
