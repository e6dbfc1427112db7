"""Tests for typed records, row validation and the error taxonomy."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from backend.circuit_flow.db.repositories import to_record
from backend.circuit_flow.errors import (
    CorruptRowError,
    DocumentNotFoundError,
    ErrorCode,
    InvalidRequestError,
    StorageUnavailableError,
)
from backend.circuit_flow.models import (
    DocumentDownload,
    DocumentRecord,
    DocumentSummary,
    GenerateRequest,
)

NOW = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def _row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": "prd",
        "title": "Product Requirements",
        "type": "cpu",
        "description": None,
        "content": "# PRD\n",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


class TestToRecord:
    """Driver rows are validated into typed records."""

    def test_valid_row(self) -> None:
        """Test a well-formed row becomes a DocumentRecord."""
        record = to_record(DocumentRecord, _row())

        assert record.id == "prd"
        assert record.description is None
        assert record.created_at == NOW

    def test_summary_ignores_extra_columns(self) -> None:
        """Test a summary built from a full row drops content."""
        summary = to_record(DocumentSummary, _row())

        assert "content" not in summary.model_dump()

    def test_missing_column_raises_corrupt_row(self) -> None:
        """Test a row without a required column is rejected."""
        row = _row()
        del row["title"]

        with pytest.raises(CorruptRowError) as exc_info:
            to_record(DocumentRecord, row)

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_wrong_type_raises_corrupt_row(self) -> None:
        """Test a non-text content value is rejected."""
        with pytest.raises(CorruptRowError):
            to_record(DocumentDownload, {"title": "PRD", "content": None})

    def test_corrupt_row_is_storage_error(self) -> None:
        """Test corrupt rows surface as DATABASE_ERROR 500s."""
        error = CorruptRowError("Stored document is malformed")

        assert isinstance(error, StorageUnavailableError)
        assert error.status_code == 500
        assert error.code is ErrorCode.DATABASE_ERROR


class TestWireShape:
    """Records serialize with camelCase keys."""

    def test_summary_uses_camel_case(self) -> None:
        """Test createdAt/updatedAt aliases on output."""
        data = to_record(DocumentSummary, _row()).model_dump(by_alias=True, mode="json")

        assert set(data) == {"id", "title", "type", "description", "createdAt", "updatedAt"}
        assert data["createdAt"].startswith("2025-01-01T09:00:00")

    def test_populate_by_field_name(self) -> None:
        """Test records accept snake_case names too."""
        summary = DocumentSummary(
            id="a", title="A", type="io", created_at=NOW, updated_at=NOW
        )

        assert summary.description is None


class TestErrors:
    """Domain errors carry their HTTP status and code."""

    def test_not_found_message(self) -> None:
        error = DocumentNotFoundError("missing")

        assert error.status_code == 404
        assert error.code is ErrorCode.NOT_FOUND
        assert error.message == "Document with id 'missing' not found"

    def test_invalid_request(self) -> None:
        error = InvalidRequestError("bad")

        assert error.status_code == 422
        assert error.code is ErrorCode.VALIDATION_ERROR


class TestGenerateRequest:
    """Prompt validation."""

    def test_prompt_is_stripped(self) -> None:
        assert GenerateRequest(prompt="  build a thing  ").prompt == "build a thing"

    @pytest.mark.parametrize("prompt", ["", "   ", "x" * 5001])
    def test_invalid_prompts(self, prompt: str) -> None:
        with pytest.raises(ValidationError):
            GenerateRequest(prompt=prompt)

    def test_max_length_accepted(self) -> None:
        assert len(GenerateRequest(prompt="x" * 5000).prompt) == 5000
