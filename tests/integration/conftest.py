"""Integration test fixtures for database and HTTP client operations.

Every test gets its own in-memory SQLite database. StaticPool keeps the
single connection alive so all sessions see the same data.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from src.tracker.api.dependencies import get_db_session
from src.tracker.core.db import build_engine, get_session, init_models
from src.tracker.main import create_app
from src.tracker.models import User
from tests.helpers import create_user


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with all tables."""
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for service-level tests.

    Services commit themselves. Helpers in tests.helpers commit too.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def owner(db_session: AsyncSession) -> User:
    return await create_user(db_session, full_name="Olivia Owner", email="owner@example.com")


@pytest.fixture
async def bob(db_session: AsyncSession) -> User:
    return await create_user(db_session, full_name="Bob Builder", email="bob@x.com")


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    """Application with the request session bound to the test database."""
    application = create_app()

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_test_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

