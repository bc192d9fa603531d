"""POST /api/generate - research, draft and refine an article for one topic."""

import asyncio
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from orchestrator.core import INVALID_BODY_MESSAGE, ArticleOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.responses import ErrorResponseDTO, GenerateRequestDTO, GenerateResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Generate"])


@router.post(
    "/generate",
    response_model=GenerateResponseDTO,
    responses={
        400: {"model": ErrorResponseDTO, "description": "Missing or invalid topic"},
        500: {"model": ErrorResponseDTO, "description": "Misconfiguration or generation failure"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": GenerateRequestDTO.model_json_schema()}},
        }
    },
)
async def generate_article(
    request: Request,
    orchestrator: ArticleOrchestrator = Depends(get_orchestrator),
):
    """
    Run the article pipeline for ``{"topic": "..."}``.

    The body is read raw so a bad topic produces ``{"error": ...}`` with 400
    instead of FastAPI's validation envelope.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning(
            "Rejected non-JSON request body",
            extra={"extra_fields": {"request_id": request_id}},
        )
        return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})

    # The pipeline is blocking network I/O; keep it off the event loop
    result = await asyncio.to_thread(orchestrator.generate, payload)

    logger.info(
        "Generate request finished",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "pipeline_request_id": result.request_id,
                "status_code": result.status_code,
                "latency_ms": result.latency_ms,
            }
        },
    )
    if result.is_error:
        body = ErrorResponseDTO.from_article_response(result)
    else:
        body = GenerateResponseDTO.from_article_response(result)
    return JSONResponse(status_code=result.status_code, content=body.model_dump())
