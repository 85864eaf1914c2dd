"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from llm_translator.interface.dependencies import get_processor
from llm_translator.interface.schemas import (
    ErrorResponse,
    TranslateRequest,
    TranslateResponse,
)
from llm_translator.services.translation_processor import TranslationRequestProcessor

router = APIRouter()


@router.post(
    "/translate",
    response_model=TranslateResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Empty or over-long text"},
        502: {"model": ErrorResponse, "description": "Unparseable model output"},
        503: {"model": ErrorResponse, "description": "Translation service unreachable"},
    },
)
def translate(
    body: TranslateRequest,
    processor: TranslationRequestProcessor = Depends(get_processor),
) -> dict[str, Any]:
    """Translate text through the remote model.

    Declared sync: FastAPI runs it in the thread pool, so the blocking
    transport does not stall the event loop.
    """
    return processor.translate(body.model_dump())
