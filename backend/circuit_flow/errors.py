"""Error taxonomy for the document catalog.

Every error carries the HTTP status and wire code it maps to, plus a
client-safe message. Internal detail (driver errors, tracebacks) is logged
where the error is raised and never placed in ``message``.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Wire codes used in ``{"error", "code"}`` response bodies."""

    NOT_FOUND = "NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class CatalogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DocumentNotFoundError(CatalogError):
    """No row matches the requested document id."""

    status_code = 404
    code = ErrorCode.NOT_FOUND

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document with id '{document_id}' not found")
        self.document_id = document_id


class StorageUnavailableError(CatalogError):
    """Connection or query failure in the document store."""

    status_code = 500
    code = ErrorCode.DATABASE_ERROR


class CorruptRowError(StorageUnavailableError):
    """A stored row does not match the expected record shape."""


class InvalidRequestError(CatalogError):
    """Malformed client input, e.g. an empty prompt."""

    status_code = 422
    code = ErrorCode.VALIDATION_ERROR
