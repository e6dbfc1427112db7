"""Document domain models.

Records are validated at the store boundary and serialized with camelCase
aliases on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PROMPT_MAX_CHARS = 5000


class CamelModel(BaseModel):
    """Base model emitting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentSummary(CamelModel):
    """Document metadata (list projection, never carries content)."""

    id: str
    title: str
    type: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class DocumentRecord(DocumentSummary):
    """Full document including the markdown body."""

    content: str


class DocumentDownload(CamelModel):
    """Narrow projection used for file export."""

    title: str
    content: str


class GeneratedDocument(CamelModel):
    """Document rendered by the generation templates (not persisted)."""

    id: str
    title: str
    type: str
    description: str
    content: str


class DocumentListResponse(CamelModel):
    """Response for GET /api/documents."""

    documents: list[DocumentSummary]


class GenerateRequest(BaseModel):
    """Request body for POST /api/generate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    prompt: str = Field(..., min_length=1, max_length=PROMPT_MAX_CHARS)


class GenerateResponse(CamelModel):
    """Response for POST /api/generate."""

    documents: list[GeneratedDocument]


class ErrorResponse(BaseModel):
    """Uniform error body."""

    error: str
    code: str
