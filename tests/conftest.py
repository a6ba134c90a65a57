"""
Pytest configuration and fixtures.
Provides a test app client backed by an in-memory SQLite database.
"""

import os

# Settings are read when app.main is imported, so the environment comes first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.config import Settings
from app.core.security import create_access_token
from app.db import session as db_session
from app.db.base import Base
from app.db.repositories.user_repository import UserRepository
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import create_app


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"

USER_1 = "user-1"
USER_2 = "user-2"


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": TEST_DATABASE_URL,
        "SECRET_KEY": TEST_SECRET_KEY,
        "RATE_LIMIT_ENABLED": False,
        "AUTH_MODE": "jwt",
    }
    values.update(overrides)
    return Settings(**values)


def make_token(
    user_id: str,
    email: str = "owner@example.com",
    secret_key: str = TEST_SECRET_KEY,
    expires_delta: timedelta = timedelta(minutes=5),
) -> str:
    return create_access_token(
        {"userId": user_id, "email": email},
        secret_key,
        expires_delta=expires_delta,
    )


def bearer(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def users(test_session_maker):
    """Two account holders who own clients in the tests."""
    async with test_session_maker() as session:
        repo = UserRepository(session)
        for user_id, email in ((USER_1, "one@example.com"), (USER_2, "two@example.com")):
            await repo.create(
                id=user_id,
                email=email,
                password="not-a-real-hash",
                first_name="Test",
                last_name=user_id,
            )
        await session.commit()
    return USER_1, USER_2


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker, users):
    """Create a test database session with both users present."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
def build_app(test_session_maker, users, monkeypatch):
    """Factory for apps wired to the test database."""

    def _build(**overrides):
        application = create_app(make_settings(**overrides))

        async def override_get_db():
            async with test_session_maker() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        application.dependency_overrides[get_db] = override_get_db
        monkeypatch.setattr(db_session, "async_session_maker", test_session_maker)
        return application

    return _build


@pytest.fixture(scope="function")
def test_app(build_app):
    return build_app()


@pytest.fixture(scope="function")
async def test_client(test_app):
    """
    Create a test HTTP client.
    Unhandled errors come back as 500 responses instead of being re-raised.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
