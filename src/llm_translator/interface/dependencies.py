"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

from llm_translator.infrastructure.config import get_settings
from llm_translator.infrastructure.http_transport import HttpTransportClient
from llm_translator.services.translation_processor import TranslationRequestProcessor


@lru_cache(maxsize=1)
def get_processor() -> TranslationRequestProcessor:
    """Build (or return cached) processor with the HTTP transport injected.

    Caching is safe: the processor and transport hold only immutable
    configuration.
    """
    settings = get_settings()
    transport = HttpTransportClient(settings.client_config())
    return TranslationRequestProcessor(transport)
