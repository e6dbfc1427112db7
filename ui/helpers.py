"""Helper functions for UI - Circuit Flow API client + board view builders."""

import logging
import os
import re
from typing import Any
from urllib.parse import unquote

import httpx

from backend.circuit_flow.generation import generate_documents
from backend.circuit_flow.models.documents import GeneratedDocument

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:3001"
API_BASE_URL_ENV = "CIRCUIT_FLOW_API_URL"
REQUEST_TIMEOUT_S = 10.0

# Board motif per document type: (label, icon)
MOTIFS: dict[str, tuple[str, str]] = {
    "cpu": ("CPU socket", "🧠"),
    "memory": ("RAM slots", "💾"),
    "gpu": ("PCIe GPU", "🎮"),
    "io": ("I/O panel", "🔌"),
    "storage": ("Storage bay", "🗄️"),
}
DEFAULT_MOTIF = ("Microchip", "🔲")

_FILENAME_STAR = re.compile(r"filename\*=UTF-8''([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename="((?:[^"\\]|\\.)+)"', re.IGNORECASE)
_QUOTED_PAIR = re.compile(r"\\(.)")


def get_api_base_url() -> str:
    """API base URL, overridable via CIRCUIT_FLOW_API_URL."""
    return os.environ.get(API_BASE_URL_ENV) or DEFAULT_API_BASE_URL


def make_client(
    base_url: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an HTTP client bound to the API base URL.

    Args:
        base_url: API host (default: get_api_base_url())
        transport: Optional transport (tests pass httpx.MockTransport)

    Returns:
        httpx.Client; caller closes it
    """
    return httpx.Client(
        base_url=base_url or get_api_base_url(),
        timeout=REQUEST_TIMEOUT_S,
        transport=transport,
    )


def generate_documentation(client: httpx.Client, prompt: str) -> list[dict[str, Any]]:
    """Generate documents for a prompt.

    Calls POST /api/generate; on any non-2xx status or transport failure the
    documents are rendered locally with the same templates (demo mode).

    Args:
        client: API client
        prompt: Free-text product idea

    Returns:
        List of {id, title, type, description, content} dicts
    """
    try:
        response = client.post("/api/generate", json={"prompt": prompt})
        response.raise_for_status()
        # ValidationError is a ValueError: malformed payloads also fall back
        return [
            GeneratedDocument.model_validate(doc).model_dump()
            for doc in response.json()["documents"]
        ]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to generate documentation, using local templates: %s", e)
        return [doc.model_dump() for doc in generate_documents(prompt)]


def fetch_documents(client: httpx.Client) -> list[dict[str, Any]]:
    """Fetch catalog metadata; empty list on failure."""
    try:
        response = client.get("/api/documents")
        response.raise_for_status()
        documents: list[dict[str, Any]] = response.json()["documents"]
        return documents
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.warning("Failed to fetch documents: %s", e)
        return []


def fetch_document(client: httpx.Client, document_id: str) -> dict[str, Any] | None:
    """Fetch one document with content; None if missing or on failure."""
    try:
        response = client.get(f"/api/documents/{document_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        document: dict[str, Any] = response.json()
        return document
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Failed to fetch document %s: %s", document_id, e)
        return None


def filename_from_disposition(header: str | None) -> str | None:
    """Extract the filename from a Content-Disposition header."""
    if not header:
        return None
    star = _FILENAME_STAR.search(header)
    if star:
        return unquote(star.group(1).strip())
    plain = _FILENAME.search(header)
    return _QUOTED_PAIR.sub(r"\1", plain.group(1)) if plain else None


def download_document(
    client: httpx.Client,
    document_id: str,
    generated_docs: list[dict[str, Any]] | None = None,
) -> tuple[str, bytes] | None:
    """Resolve a document download.

    Generated documents are served from memory (filename = title); anything
    else goes through GET /api/documents/{id}/download.

    Args:
        client: API client
        document_id: Document id
        generated_docs: Documents returned by generate_documentation, if any

    Returns:
        (filename, body) or None on failure
    """
    for doc in generated_docs or []:
        if doc.get("id") == document_id:
            return (doc["title"], doc["content"].encode("utf-8"))

    try:
        response = client.get(f"/api/documents/{document_id}/download")
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Failed to download document %s: %s", document_id, e)
        return None

    filename = filename_from_disposition(response.headers.get("content-disposition"))
    return (filename or f"{document_id}.md", response.content)


def cached_download(
    cache: dict[str, tuple[str, bytes]],
    client: httpx.Client,
    document_id: str,
) -> tuple[str, bytes] | None:
    """Download a catalog document once; later calls reuse the cached file.

    Failures are not cached, so the next click retries.
    """
    if document_id in cache:
        return cache[document_id]
    download = download_document(client, document_id)
    if download is not None:
        cache[document_id] = download
    return download


def build_board_regions(documents: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Map documents to board regions, one per document, in input order.

    Args:
        documents: Document dicts with id, title, type, description

    Returns:
        List of {id, label, motif, icon, description}
    """
    regions = []
    for doc in documents:
        motif, icon = MOTIFS.get(doc.get("type", ""), DEFAULT_MOTIF)
        regions.append(
            {
                "id": doc["id"],
                "label": doc.get("title", doc["id"]),
                "motif": motif,
                "icon": icon,
                "description": doc.get("description") or "",
            }
        )
    return regions
