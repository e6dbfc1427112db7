"""Document store protocol and its SQL implementation."""

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.circuit_flow.db.models import Document
from backend.circuit_flow.errors import CorruptRowError, StorageUnavailableError
from backend.circuit_flow.models.documents import (
    DocumentDownload,
    DocumentRecord,
    DocumentSummary,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

LIST_FAILED = "Failed to fetch documents"
GET_FAILED = "Failed to fetch document"
DOWNLOAD_FAILED = "Failed to download document"

# Driver connection failures (e.g. asyncpg refusing a connection) are not wrapped by SQLAlchemy
STORAGE_ERRORS = (SQLAlchemyError, OSError)

_SUMMARY_COLUMNS = (
    Document.id,
    Document.title,
    Document.type,
    Document.description,
    Document.created_at,
    Document.updated_at,
)


class DocumentStore(Protocol):
    """Read access to the document catalog."""

    async def list_documents(self) -> list[DocumentSummary]:
        """List document metadata ordered by creation time (oldest first).

        Returns:
            Summaries without content; empty list for an empty store
        """
        ...

    async def get_document(self, document_id: str) -> DocumentRecord | None:
        """Get a full document by exact id.

        Args:
            document_id: Document ID

        Returns:
            Document record or None if not found
        """
        ...

    async def get_document_for_download(self, document_id: str) -> DocumentDownload | None:
        """Get the title/content projection used for file export.

        Args:
            document_id: Document ID

        Returns:
            Download projection or None if not found
        """
        ...


def to_record(model: type[RecordT], row: Mapping[str, Any]) -> RecordT:
    """Validate a driver row into a typed record.

    Raises:
        CorruptRowError: If the row does not match the record shape.
    """
    try:
        return model.model_validate(dict(row))
    except ValidationError as e:
        logger.error(
            "Rejected %s row: %s",
            model.__name__,
            e,
            extra={"structured": {"record": model.__name__, "row_id": row.get("id")}},
        )
        raise CorruptRowError("Stored document is malformed") from e


class SqlDocumentStore:
    """SQL implementation of DocumentStore.

    All lookups go through bound parameters; ids are never interpolated.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_documents(self) -> list[DocumentSummary]:
        """List document metadata ordered by creation time."""
        query = select(*_SUMMARY_COLUMNS).order_by(
            Document.created_at.asc(), Document.id.asc()
        )
        try:
            result = await self._session.execute(query)
            rows = result.mappings().all()
        except STORAGE_ERRORS as e:
            logger.error("Error fetching documents: %s", e, exc_info=True)
            raise StorageUnavailableError(LIST_FAILED) from e

        return [to_record(DocumentSummary, row) for row in rows]

    async def get_document(self, document_id: str) -> DocumentRecord | None:
        """Get a full document by id."""
        query = select(*_SUMMARY_COLUMNS, Document.content).where(Document.id == document_id)
        try:
            result = await self._session.execute(query)
            row = result.mappings().first()
        except STORAGE_ERRORS as e:
            logger.error("Error fetching document %r: %s", document_id, e, exc_info=True)
            raise StorageUnavailableError(GET_FAILED) from e

        if row is None:
            return None
        return to_record(DocumentRecord, row)

    async def get_document_for_download(self, document_id: str) -> DocumentDownload | None:
        """Get title and content for a document by id."""
        query = select(Document.title, Document.content).where(Document.id == document_id)
        try:
            result = await self._session.execute(query)
            row = result.mappings().first()
        except STORAGE_ERRORS as e:
            logger.error("Error downloading document %r: %s", document_id, e, exc_info=True)
            raise StorageUnavailableError(DOWNLOAD_FAILED) from e

        if row is None:
            return None
        return to_record(DocumentDownload, row)
