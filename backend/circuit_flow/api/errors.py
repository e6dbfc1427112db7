"""Error handlers producing uniform ``{"error", "code"}`` responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.circuit_flow.errors import CatalogError, ErrorCode, InvalidRequestError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"
VALIDATION_MESSAGE = "Request validation failed"


def error_response(status_code: int, message: str, code: ErrorCode) -> JSONResponse:
    """Build an error response with the uniform body shape."""
    return JSONResponse(status_code=status_code, content={"error": message, "code": code.value})


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle domain errors raised by routes and the store."""
    return error_response(exc.status_code, exc.message, exc.code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing errors.

    Unmatched paths and unsupported methods both answer 404 NOT_FOUND.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE, ErrorCode.NOT_FOUND)

    if exc.status_code >= 500:
        return error_response(
            exc.status_code, INTERNAL_ERROR_MESSAGE, ErrorCode.INTERNAL_SERVER_ERROR
        )
    return error_response(exc.status_code, str(exc.detail), ErrorCode.VALIDATION_ERROR)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle request body/parameter validation errors."""
    fields = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
    logger.info(
        "Validation error on %s %s",
        request.method,
        request.url.path,
        extra={"structured": {"fields": fields}},
    )
    return await catalog_error_handler(request, InvalidRequestError(VALIDATION_MESSAGE))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors; detail is logged, never returned."""
    logger.error(
        "Unhandled error on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        ErrorCode.INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
