"""
Pytest configuration for the Employee Service.

Provides fixtures for:
- An in-memory SQLite database (tables created and dropped per test)
- A database session for repository-level tests
- An httpx AsyncClient wired straight to the ASGI app

DATABASE_URL is set before anything from employee_service is imported,
because the engine is created at import time from the settings.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["DEBUG"] = "true"

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from employee_service.db import models  # noqa: E402,F401
from employee_service.db.engine import Base, async_session_maker, engine  # noqa: E402
from employee_service.main import app  # noqa: E402


@pytest.fixture
async def db_tables() -> AsyncIterator[None]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Each test runs on its own event loop; don't carry the pooled
    # connection over to the next one.
    await engine.dispose()


@pytest.fixture
async def db_session(db_tables) -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session


@pytest.fixture
async def client(db_tables) -> AsyncIterator[AsyncClient]:
    # raise_app_exceptions=False: let the 500 handler's response reach the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_payload():
    """Build a valid employee JSON body, overriding any field."""

    def _make(**overrides) -> dict:
        payload = {
            "name": "John Doe",
            "designation": "Developer",
            "dateOfBirth": "1990-05-15",
            "company": "Tech Corp",
        }
        payload.update(overrides)
        return payload

    return _make
