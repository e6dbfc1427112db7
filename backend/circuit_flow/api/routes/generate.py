"""Document generation endpoint - POST /api/generate."""

import logging

from fastapi import APIRouter

from backend.circuit_flow.generation import generate_documents
from backend.circuit_flow.models.documents import ErrorResponse, GenerateRequest, GenerateResponse

router = APIRouter(prefix="/api/generate", tags=["generate"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=GenerateResponse,
    responses={422: {"model": ErrorResponse, "description": "Invalid prompt"}},
)
async def generate(request: GenerateRequest) -> GenerateResponse:
    """Render the five-document set for a prompt.

    Documents are returned, not persisted.
    """
    documents = generate_documents(request.prompt)
    logger.info(
        "Generated %d documents",
        len(documents),
        extra={"structured": {"prompt_chars": len(request.prompt)}},
    )
    return GenerateResponse(documents=documents)
