"""
Database Engine & Session Management
=============================================================================
CONCEPT: Async SQLAlchemy with Connection Pooling

KEY CONCEPTS:
  1. Engine: The connection factory. Creates and manages DB connections.
  2. Session: A "workspace" for DB operations. Groups queries into transactions.
  3. Connection Pool: Reuses DB connections instead of creating new ones per request.
  4. Async: asyncpg (PostgreSQL) or aiosqlite (SQLite) for non-blocking I/O.

POOL SETTINGS (server databases only):
  - pool_size / max_overflow: steady-state and burst connection counts
  - pool_pre_ping=True: check a connection is alive before handing it out
  - pool_recycle=3600: replace connections after 1 hour

SQLite gets a single shared connection (StaticPool) instead, so an
in-memory database is visible to every session of the process.
=============================================================================
"""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from employee_service.config import settings


def _engine_options() -> dict:
    if settings.is_sqlite:
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    **_engine_options(),
)

# Loaded attributes stay readable after commit; responses are built from
# the committed objects outside any further database round trip.
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    One AsyncSession per request. EmployeeService commits or rolls back;
    this only guarantees the session is closed afterwards.
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables() -> None:
    """Create every table registered on `Base` (no-op for existing tables)."""
    # Import for the side effect of registering the models on Base.metadata
    from employee_service.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
