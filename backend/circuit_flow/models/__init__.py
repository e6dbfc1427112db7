"""Models package - re-exports for convenience."""

from backend.circuit_flow.models.documents import (
    PROMPT_MAX_CHARS,
    CamelModel,
    DocumentDownload,
    DocumentListResponse,
    DocumentRecord,
    DocumentSummary,
    ErrorResponse,
    GeneratedDocument,
    GenerateRequest,
    GenerateResponse,
)

__all__ = [
    "PROMPT_MAX_CHARS",
    "CamelModel",
    "DocumentDownload",
    "DocumentListResponse",
    "DocumentRecord",
    "DocumentSummary",
    "ErrorResponse",
    "GenerateRequest",
    "GenerateResponse",
    "GeneratedDocument",
]
