"""Template-based document generation."""

from backend.circuit_flow.generation.facade import (
    DOCUMENT_TEMPLATES,
    extract_project_name,
    generate_documents,
)

__all__ = ["DOCUMENT_TEMPLATES", "extract_project_name", "generate_documents"]
