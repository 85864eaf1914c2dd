"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from llm_translator.interface.error_handlers import register_error_handlers
from llm_translator.interface.routes import router


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="LLM Translator",
        version="1.0.0",
        description=(
            "Builds a translation prompt for a chat-completions model, sends "
            "it, and returns the structured translation recovered from the "
            "model's reply."
        ),
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
