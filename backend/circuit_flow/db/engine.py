"""Database engine, URL normalization and the application storage handle."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from backend.circuit_flow.config import Settings

# (sync driver prefix, async driver prefix)
_DRIVER_PAIRS = (
    ("postgresql://", "postgresql+asyncpg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)


def async_database_url(database_url: str) -> str:
    """Upgrade a sync connection string to its async driver.

    Raises:
        ValueError: If the URL is empty.
    """
    if not database_url:
        raise ValueError("DATABASE_URL must be set to a valid connection string.")

    for sync_prefix, async_prefix in _DRIVER_PAIRS:
        if database_url.startswith(sync_prefix):
            return database_url.replace(sync_prefix, async_prefix, 1)
    return database_url


def sync_database_url(database_url: str) -> str:
    """Downgrade an async connection string to its sync driver.

    Used by Alembic and the seed loader, which run on sync SQLAlchemy.

    Raises:
        ValueError: If the URL is empty.
    """
    if not database_url:
        raise ValueError("DATABASE_URL must be set to a valid connection string.")

    for sync_prefix, async_prefix in _DRIVER_PAIRS:
        if database_url.startswith(async_prefix):
            return database_url.replace(async_prefix, sync_prefix, 1)
    return database_url


def create_engine_from_url(database_url: str) -> Engine:
    """Create sync SQLAlchemy engine for maintenance tasks."""
    return create_engine(sync_database_url(database_url), pool_pre_ping=True, echo=False)


def create_async_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine from settings."""
    return create_async_engine(
        async_database_url(settings.database_url), pool_pre_ping=True, echo=False
    )


class Database:
    """Process-wide storage handle.

    Owns the async engine (and its connection pool) plus the session factory.
    Constructed by the application factory, disposed on shutdown.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle from application settings."""
        return cls(create_async_engine_from_settings(settings))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session scoped to the caller."""
        async with self._session_factory() as session:
            yield session

    async def ping(self) -> None:
        """Run a trivial query; raises on connectivity failure."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self._engine.dispose()
