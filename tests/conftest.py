"""Shared pytest fixtures for all test suites."""

import os

# Must be set before the application module is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from backend.circuit_flow.config import Settings
from backend.circuit_flow.db.engine import Database
from backend.circuit_flow.db.models import Base, Document
from backend.circuit_flow.main import create_app

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a file-backed SQLite catalog for this test."""
    return tmp_path / "catalog.db"


@pytest.fixture
def sync_engine(db_path: Path) -> Generator[Engine, None, None]:
    """Sync engine with the schema created (used for setup and seeding)."""
    engine = create_engine(f"sqlite:///{db_path}", poolclass=NullPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def insert_document(sync_engine: Engine) -> Callable[..., None]:
    """Insert a document row directly.

    Usage:
        insert_document("prd", title="PRD", minutes=0)
    """

    def _insert(
        document_id: str,
        *,
        title: str = "Untitled",
        type: str = "cpu",
        description: str | None = "A document",
        content: str = "# Body\n",
        minutes: int = 0,
    ) -> None:
        created = BASE_TIME + timedelta(minutes=minutes)
        with Session(sync_engine) as session:
            session.add(
                Document(
                    id=document_id,
                    title=title,
                    type=type,
                    description=description,
                    content=content,
                    created_at=created,
                    updated_at=created,
                )
            )
            session.commit()

    return _insert


@pytest.fixture
def database(db_path: Path, sync_engine: Engine) -> Database:
    """Async storage handle over the same SQLite file.

    NullPool: the app runs on the TestClient's event loop, so no pooled
    connection may outlive a request.
    """
    return Database(create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool))


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """Settings pointing at the test database."""
    return Settings(database_url=f"sqlite+aiosqlite:///{db_path}")


@pytest.fixture
def app(test_settings: Settings, database: Database) -> FastAPI:
    """Application wired to the test database."""
    return create_app(test_settings, database=database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create test client (lifespan runs, database disposed on exit)."""
    with TestClient(app) as test_client:
        yield test_client
