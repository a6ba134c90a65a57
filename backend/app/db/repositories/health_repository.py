"""
Health repository.
Provides database health check functionality.
"""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger

logger = get_logger(__name__)


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """
        Run a trivial query against the database.

        Returns:
            True if the database answered, False otherwise
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError as exc:
            logger.warning("Database health check failed", extra={"error": str(exc)})
            return False
