"""Global exception handlers — translate domain errors to HTTP responses.

Caller mistakes (``InvalidInputError``) become 400; failures on the model
side become 502 (unusable reply) or 503 (service unreachable).  Every body
uses the ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from llm_translator.domain.exceptions import (
    ConfigurationError,
    InvalidInputError,
    ParseError,
    TranslatorError,
    TransportError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: dict[type[TranslatorError], int] = {
    InvalidInputError: 400,
    ParseError: 502,
    TransportError: 503,
    ConfigurationError: 500,
}


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(TranslatorError)
    async def translator_error_handler(request: Request, exc: TranslatorError) -> JSONResponse:
        status_code = _EXCEPTION_STATUS.get(type(exc), 500)
        if status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        else:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return _error_json(status_code, str(exc))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
