"""UI helpers driven against the real application."""

from collections.abc import Callable

from fastapi.testclient import TestClient

from ui.helpers import (
    build_board_regions,
    download_document,
    fetch_document,
    fetch_documents,
    generate_documentation,
)


def test_generate_through_api(client: TestClient) -> None:
    """Test the UI receives the server's five documents."""
    documents = generate_documentation(client, "Build a todo app with AI")

    assert [d["title"] for d in documents] == [
        "PRD.md",
        "TRD.md",
        "Architecture.md",
        "API-Spec.md",
        "Deployment.md",
    ]
    assert len(build_board_regions(documents)) == 5


def test_catalog_browse_and_download(
    client: TestClient, insert_document: Callable[..., None]
) -> None:
    insert_document("prd", title="Product Requirements", type="cpu", content="# PRD ✓\n")

    catalog = fetch_documents(client)
    assert [d["id"] for d in catalog] == ["prd"]

    document = fetch_document(client, "prd")
    assert document is not None
    assert document["content"] == "# PRD ✓\n"

    assert download_document(client, "prd") == (
        "Product_Requirements.md",
        "# PRD ✓\n".encode("utf-8"),
    )


def test_missing_catalog_document(client: TestClient) -> None:
    assert fetch_document(client, "ghost") is None
    assert download_document(client, "ghost") is None
