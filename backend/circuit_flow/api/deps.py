"""FastAPI dependencies for the storage handle and document store."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.circuit_flow.config import Settings
from backend.circuit_flow.db.engine import Database
from backend.circuit_flow.db.repositories import DocumentStore, SqlDocumentStore


def get_database(request: Request) -> Database:
    """Return the storage handle opened by the application lifespan."""
    return request.app.state.database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for a request-scoped async session.

    Yields:
        AsyncSession instance
    """
    async with database.session() as session:
        yield session


def get_document_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DocumentStore:
    """FastAPI dependency for the document store."""
    return SqlDocumentStore(session)


DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings
