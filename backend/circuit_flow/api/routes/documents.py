"""Document catalog endpoints - list, get, download."""

import re
from urllib.parse import quote

from fastapi import APIRouter, Response

from backend.circuit_flow.api.deps import DocumentStoreDep
from backend.circuit_flow.errors import DocumentNotFoundError
from backend.circuit_flow.models.documents import (
    DocumentListResponse,
    DocumentRecord,
    ErrorResponse,
)

router = APIRouter(prefix="/api/documents", tags=["documents"])

MARKDOWN_MEDIA_TYPE = "text/markdown"

_WHITESPACE = re.compile(r"\s+")

_ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "Document not found"},
    500: {"model": ErrorResponse, "description": "Storage unavailable"},
}


def download_filename(title: str) -> str:
    """Derive the download filename: whitespace runs become underscores."""
    return _WHITESPACE.sub("_", title) + ".md"


def content_disposition(filename: str) -> str:
    """Build an attachment Content-Disposition header value.

    Non-ASCII names get an ASCII fallback plus an RFC 5987 ``filename*``.
    """
    if filename.isascii():
        escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
        return f'attachment; filename="{escaped}"'

    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    fallback = fallback.replace('"', "_").replace("\\", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("", response_model=DocumentListResponse, responses={500: _ERROR_RESPONSES[500]})
async def list_documents(store: DocumentStoreDep) -> DocumentListResponse:
    """List document metadata, oldest first. Content is never included."""
    documents = await store.list_documents()
    return DocumentListResponse(documents=documents)


@router.get("/{document_id}", response_model=DocumentRecord, responses=_ERROR_RESPONSES)
async def get_document(document_id: str, store: DocumentStoreDep) -> DocumentRecord:
    """Fetch a single document with content.

    Args:
        document_id: Exact document id
        store: Document store

    Returns:
        Full document

    Raises:
        DocumentNotFoundError: If no document has this id
    """
    document = await store.get_document(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


@router.get(
    "/{document_id}/download",
    response_class=Response,
    responses={
        200: {"content": {MARKDOWN_MEDIA_TYPE: {}}, "description": "Markdown file"},
        **_ERROR_RESPONSES,
    },
)
async def download_document(document_id: str, store: DocumentStoreDep) -> Response:
    """Download a document as a markdown attachment; body is the stored content."""
    document = await store.get_document_for_download(document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)

    return Response(
        content=document.content.encode("utf-8"),
        media_type=MARKDOWN_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(download_filename(document.title))},
    )
