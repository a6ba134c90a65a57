"""
Database session management with async SQLAlchemy 2.0.
Handles connection pooling and session lifecycle.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import Settings
from app.core.logging import get_logger
from app.db.base import Base

logger = get_logger(__name__)

# Process-wide engine and sessionmaker, built once by init_db()
engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine with connection pooling."""
    global engine

    if settings.DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using
        )

    logger.info(
        "Database engine created",
        extra={
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
        },
    )

    return engine


def create_sessionmaker(settings: Settings) -> async_sessionmaker[AsyncSession]:
    """Create async sessionmaker."""
    global async_session_maker

    if engine is None:
        create_engine(settings)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    logger.info("Sessionmaker created")
    return async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session.
    Yields a session, commits on success and rolls back on error.
    """
    if async_session_maker is None:
        raise RuntimeError("Database is not initialized; call init_db() first")

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(settings: Settings) -> None:
    """
    Initialize the engine, verify connectivity and optionally create tables.

    Raises:
        SQLAlchemyError: If the database cannot be reached
    """
    if engine is None:
        create_engine(settings)

    if async_session_maker is None:
        create_sessionmaker(settings)

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database connection verified")

    if settings.DB_CREATE_TABLES:
        import app.models  # noqa: F401  registers every model on Base.metadata

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")


async def close_db() -> None:
    """Close database connections."""
    global engine, async_session_maker

    if engine:
        await engine.dispose()
        logger.info("Database connections closed")
    engine = None
    async_session_maker = None
