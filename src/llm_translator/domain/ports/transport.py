"""Port: translation transport — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from llm_translator.domain.entities import ConversationTurn


class TranslationTransport(Protocol):
    """Abstract contract for delivering a prompt to the chat-completions endpoint."""

    def send(self, turns: Sequence[ConversationTurn]) -> str:
        """POST the conversation and return the raw response body."""
        ...
