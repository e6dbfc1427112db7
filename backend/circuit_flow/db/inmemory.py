"""In-memory implementation of the DocumentStore interface."""

from datetime import datetime, timezone

from backend.circuit_flow.models.documents import (
    DocumentDownload,
    DocumentRecord,
    DocumentSummary,
)


class InMemoryDocumentStore:
    """In-memory implementation of DocumentStore."""

    def __init__(self, documents: list[DocumentRecord] | None = None) -> None:
        self._documents: dict[str, DocumentRecord] = {}
        for document in documents or []:
            self.add(document)

    def add(self, document: DocumentRecord) -> None:
        """Insert a document; ids are immutable so duplicates are rejected."""
        if document.id in self._documents:
            raise ValueError(f"Document id already exists: {document.id}")
        self._documents[document.id] = document

    def add_new(
        self,
        *,
        document_id: str,
        title: str,
        type: str,
        content: str,
        description: str | None = None,
        created_at: datetime | None = None,
    ) -> DocumentRecord:
        """Insert a document, stamping timestamps like the database does."""
        now = created_at or datetime.now(timezone.utc)
        record = DocumentRecord(
            id=document_id,
            title=title,
            type=type,
            description=description,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.add(record)
        return record

    async def list_documents(self) -> list[DocumentSummary]:
        """List document metadata ordered by creation time."""
        ordered = sorted(self._documents.values(), key=lambda d: (d.created_at, d.id))
        return [
            DocumentSummary.model_validate(d.model_dump(exclude={"content"}))
            for d in ordered
        ]

    async def get_document(self, document_id: str) -> DocumentRecord | None:
        """Get a full document by id."""
        return self._documents.get(document_id)

    async def get_document_for_download(self, document_id: str) -> DocumentDownload | None:
        """Get title and content for a document by id."""
        document = self._documents.get(document_id)
        if document is None:
            return None
        return DocumentDownload(title=document.title, content=document.content)
