"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from llm_translator.domain.exceptions import ConfigurationError, InvalidInputError

MAX_TEXT_LENGTH = 1500

DEFAULT_API_ENDPOINT = "https://api.ai.sakura.ad.jp/v1/chat/completions"
DEFAULT_MODEL = "gpt-oss-120b"


def validate_text(text: object) -> str:
    """Return *text* trimmed, or raise :class:`InvalidInputError`.

    Length is counted in code points, so ``"日本" * 750`` is exactly at the
    limit.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("Input text cannot be empty.")

    trimmed = text.strip()
    if len(trimmed) > MAX_TEXT_LENGTH:
        raise InvalidInputError(
            f"Input text is too long. Max {MAX_TEXT_LENGTH} characters."
        )
    return trimmed


_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


def parse_flag(value: object) -> bool:
    """Read a boolean option; strings like ``"false"`` are parsed, not truth-tested."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidInputError(f"Invalid boolean option: {value!r}")


def _option(options: Mapping[str, Any], key: str, default: str) -> str:
    value = options.get(key)
    return default if value is None else str(value)


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    """Validated translation options.

    Build it with :meth:`from_options`; language and style identifiers are
    passed through untouched so that unknown values reach the prompt
    composer's fallback rules.
    """

    text: str
    target_language: str = "english"
    source_language: str = "auto"
    style: str = "standard"
    custom_prompt: str = ""
    is_literal: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> TranslationRequest:
        """Validate a raw option mapping (``text``, ``target``, ``source``,
        ``style``, ``custom_prompt``, ``is_literal``)."""
        return cls(
            text=validate_text(options.get("text")),
            target_language=_option(options, "target", "english"),
            source_language=_option(options, "source", "auto"),
            style=_option(options, "style", "standard"),
            custom_prompt=_option(options, "custom_prompt", ""),
            is_literal=parse_flag(options.get("is_literal")),
        )

    @property
    def auto_detect(self) -> bool:
        return self.source_language == "auto"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings for the chat-completions endpoint."""

    api_key: str
    api_endpoint: str = DEFAULT_API_ENDPOINT
    model: str = DEFAULT_MODEL

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API key cannot be empty.")
        if not self.api_endpoint:
            raise ConfigurationError("API endpoint cannot be empty.")

    def __repr__(self) -> str:
        return f"ClientConfig(api_endpoint={self.api_endpoint!r}, model={self.model!r})"
