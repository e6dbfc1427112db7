"""Integration tests for the document catalog endpoints."""

from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.circuit_flow.api.deps import get_document_store
from backend.circuit_flow.db.inmemory import InMemoryDocumentStore

MARKDOWN = "# Product Requirements Document\n\n- Prompt → docs ✨\n"
MEMORY_T0 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog(insert_document: Callable[..., None]) -> None:
    """Three documents; 'arch' and 'api' share a timestamp."""
    insert_document(
        "prd",
        title="Product Requirements",
        type="cpu",
        description="What and why",
        content=MARKDOWN,
        minutes=0,
    )
    insert_document("arch", title="System Architecture", type="gpu", minutes=2)
    insert_document("api", title="API   Specification", type="io", description=None, minutes=2)


class TestListDocuments:
    """GET /api/documents."""

    def test_list_is_ordered_and_has_no_content(self, client: TestClient, catalog: None) -> None:
        """Test oldest first, ties by id, metadata only."""
        response = client.get("/api/documents")

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert [d["id"] for d in documents] == ["prd", "api", "arch"]
        for document in documents:
            assert set(document) == {
                "id",
                "title",
                "type",
                "description",
                "createdAt",
                "updatedAt",
            }

    def test_null_description_is_null(self, client: TestClient, catalog: None) -> None:
        documents = {d["id"]: d for d in client.get("/api/documents").json()["documents"]}

        assert documents["api"]["description"] is None
        assert documents["prd"]["description"] == "What and why"

    def test_empty_catalog(self, client: TestClient) -> None:
        """Test an empty table answers 200 with an empty list."""
        response = client.get("/api/documents")

        assert response.status_code == 200
        assert response.json() == {"documents": []}


class TestGetDocument:
    """GET /api/documents/{id}."""

    def test_returns_full_document(self, client: TestClient, catalog: None) -> None:
        response = client.get("/api/documents/prd")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "prd"
        assert data["title"] == "Product Requirements"
        assert data["type"] == "cpu"
        assert data["content"] == MARKDOWN
        assert data["createdAt"].startswith("2025-01-01T09:00:00")

    def test_unknown_id_is_404(self, client: TestClient, catalog: None) -> None:
        response = client.get("/api/documents/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Document with id 'does-not-exist' not found",
            "code": "NOT_FOUND",
        }

    @pytest.mark.parametrize("document_id", ["PRD", "pr", "prd ", "prd' OR '1'='1", "%"])
    def test_ids_match_exactly(
        self, client: TestClient, catalog: None, document_id: str
    ) -> None:
        """Test lookups are exact and injection-shaped ids are plain data."""
        response = client.get(f"/api/documents/{quote(document_id, safe='')}")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

        # Table untouched
        assert len(client.get("/api/documents").json()["documents"]) == 3


class TestDownloadDocument:
    """GET /api/documents/{id}/download."""

    def test_body_is_stored_content(self, client: TestClient, catalog: None) -> None:
        """Test headers and byte-identical UTF-8 body."""
        response = client.get("/api/documents/prd/download")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert response.headers["content-disposition"] == (
            'attachment; filename="Product_Requirements.md"'
        )
        assert response.content == MARKDOWN.encode("utf-8")

    def test_whitespace_runs_collapse(self, client: TestClient, catalog: None) -> None:
        response = client.get("/api/documents/api/download")

        assert response.headers["content-disposition"] == (
            'attachment; filename="API_Specification.md"'
        )

    def test_non_ascii_title(self, client: TestClient, insert_document: Callable[..., None]) -> None:
        """Test non-ASCII titles are carried in filename*."""
        insert_document("guide", title="Guía de despliegue", content="hola")

        response = client.get("/api/documents/guide/download")

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert "filename*=UTF-8''Gu%C3%ADa_de_despliegue.md" in disposition
        assert response.content == b"hola"

    def test_unknown_id_is_404(self, client: TestClient, catalog: None) -> None:
        response = client.get("/api/documents/nope/download")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Document with id 'nope' not found",
            "code": "NOT_FOUND",
        }


class TestInMemoryStore:
    """Routes work against any DocumentStore, including the in-memory one."""

    @pytest.fixture
    def memory_client(self, app: FastAPI) -> Generator[TestClient, None, None]:
        store = InMemoryDocumentStore()
        store.add_new(
            document_id="trd",
            title="Technical Requirements",
            type="memory",
            content="# TRD\n",
            created_at=MEMORY_T0 + timedelta(minutes=1),
        )
        store.add_new(
            document_id="prd",
            title="Product Requirements",
            type="cpu",
            content=MARKDOWN,
            description="What and why",
            created_at=MEMORY_T0,
        )
        app.dependency_overrides[get_document_store] = lambda: store
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()

    def test_list(self, memory_client: TestClient) -> None:
        documents = memory_client.get("/api/documents").json()["documents"]

        assert [d["id"] for d in documents] == ["prd", "trd"]
        assert "content" not in documents[0]
        assert documents[0]["createdAt"].startswith("2025-01-01T09:00:00")

    def test_get_and_download(self, memory_client: TestClient) -> None:
        document = memory_client.get("/api/documents/prd").json()
        download = memory_client.get("/api/documents/prd/download")

        assert document["content"] == MARKDOWN
        assert download.headers["content-disposition"] == (
            'attachment; filename="Product_Requirements.md"'
        )
        assert download.content == MARKDOWN.encode("utf-8")

    def test_missing(self, memory_client: TestClient) -> None:
        response = memory_client.get("/api/documents/nope/download")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
