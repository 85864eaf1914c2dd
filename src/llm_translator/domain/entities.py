"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Decoded model answer: always has "translation"; may also carry
# "detected_source", "katakana" and "ruby_text".
TranslationResult = dict[str, Any]


class Role(str, Enum):
    """Speaker of a single chat-completion message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One message of the outbound prompt."""

    role: Role
    content: str

    def to_message(self) -> dict[str, str]:
        """Render as an OpenAI-style ``{"role", "content"}`` dict."""
        return {"role": self.role.value, "content": self.content}
