"""Translate-text use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`TranslationTransport` port and the pure service modules.  The
interface layer injects a concrete transport at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from llm_translator.domain.entities import TranslationResult
from llm_translator.domain.ports.transport import TranslationTransport
from llm_translator.domain.value_objects import TranslationRequest
from llm_translator.services.prompt_composer import build_turns
from llm_translator.services.response_extractor import extract

logger = logging.getLogger(__name__)


class TranslationRequestProcessor:
    """Runs validate → compose → send → extract for one request.

    Holds nothing but the injected transport, so a single instance can serve
    overlapping calls from several threads.

    Parameters
    ----------
    transport:
        Adapter that delivers the conversation and returns the raw body.
    """

    def __init__(self, transport: TranslationTransport) -> None:
        self._transport = transport

    def translate(self, options: Mapping[str, Any]) -> TranslationResult:
        """Validate *options*, query the model and return its decoded answer.

        Raises
        ------
        InvalidInputError
            Before any network work, for empty or over-long text.
        TransportError
            When no 200 response could be obtained.
        ParseError
            When the response carries no usable translation.
        """
        request = TranslationRequest.from_options(options)
        logger.info(
            "Translating %d chars (%s → %s, style=%s, literal=%s)",
            len(request.text),
            request.source_language,
            request.target_language,
            request.style,
            request.is_literal,
        )

        turns = build_turns(request)
        raw = self._transport.send(turns)
        result = extract(raw)

        logger.info("Translation received with keys %s", sorted(result))
        return result
