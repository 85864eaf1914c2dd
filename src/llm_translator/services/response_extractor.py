"""Response extractor — recovers the translation JSON from a chat completion.

Models do not always answer with bare JSON: the object may be wrapped in a
markdown fence, preceded by prose, or (for reasoning models) only present
in ``reasoning_content``.  Extraction therefore runs in three stages, each
with its own :class:`ParseError`:

1. decode the chat-completions envelope;
2. pick the message text (``content``, else ``reasoning_content``);
3. locate a JSON object in that text via :data:`CANDIDATE_EXTRACTORS` and
   decode it, requiring a non-blank string ``translation``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from llm_translator.domain.entities import TranslationResult
from llm_translator.domain.exceptions import ParseError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 500

CandidateExtractor = Callable[[str], str | None]

_FENCED_OBJECT_RE = re.compile(r"```json\s*(\{[\s\S]*\})\s*```")
_WHOLE_OBJECT_RE = re.compile(r"^\s*(\{[\s\S]*\})\s*$")
_FIRST_OBJECT_RE = re.compile(r"(\{[\s\S]*\})")


@dataclass(frozen=True, slots=True)
class ModelOutput:
    """Trimmed message text and the channel it was read from."""

    text: str
    from_reasoning: bool = False


# ── Candidate extractors ────────────────────────────────────────────────────


def from_fenced_block(text: str) -> str | None:
    """Object inside a ```json ... ``` fence."""
    match = _FENCED_OBJECT_RE.search(text)
    return match.group(1) if match else None


def from_whole_text(text: str) -> str | None:
    """The text itself, when it is nothing but one object."""
    match = _WHOLE_OBJECT_RE.match(text)
    return match.group(1) if match else None


def from_first_object(text: str) -> str | None:
    """First ``{`` through last ``}`` anywhere in the text."""
    match = _FIRST_OBJECT_RE.search(text)
    return match.group(1) if match else None


CANDIDATE_EXTRACTORS: tuple[CandidateExtractor, ...] = (
    from_fenced_block,
    from_whole_text,
    from_first_object,
)


def extract_json_candidate(
    text: str, extractors: Sequence[CandidateExtractor] = CANDIDATE_EXTRACTORS
) -> str:
    """Return the first extractor hit, or *text* unchanged if none match."""
    for extractor in extractors:
        candidate = extractor(text)
        if candidate is not None:
            return candidate
    return text


# ── Stages ──────────────────────────────────────────────────────────────────


def read_model_output(raw_body: str) -> ModelOutput:
    """Decode the envelope and return ``choices[0].message`` text."""
    try:
        envelope: Any = json.loads(raw_body)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ParseError(
            "Failed to parse API response JSON.", preview=str(raw_body)[:PREVIEW_LENGTH]
        ) from exc

    message = _first_message(envelope)
    content = _as_str(message.get("content")) if message else ""
    reasoning = _as_str(message.get("reasoning_content")) if message else ""

    if not content and not reasoning:
        raise ParseError("AI response was empty.")

    if content:
        return ModelOutput(text=content.strip())

    logger.info("Message content empty; falling back to reasoning_content")
    return ModelOutput(text=reasoning.strip(), from_reasoning=True)


def decode_translation(candidate: str, *, from_reasoning: bool = False) -> TranslationResult:
    """Decode *candidate* and require ``translation`` to be a non-blank string.

    Other keys are advisory and returned as the model sent them.
    """
    preview = candidate[:PREVIEW_LENGTH]
    try:
        data: Any = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise _translation_error(preview, from_reasoning) from exc

    if not isinstance(data, dict) or not _is_text(data.get("translation")):
        raise _translation_error(preview, from_reasoning)

    return data


def extract(raw_body: str) -> TranslationResult:
    """Turn a raw chat-completions response body into a translation result."""
    output = read_model_output(raw_body)
    candidate = extract_json_candidate(output.text)
    return decode_translation(candidate, from_reasoning=output.from_reasoning)


# ── Helpers ─────────────────────────────────────────────────────────────────


def _first_message(envelope: Any) -> dict[str, Any] | None:
    if not isinstance(envelope, dict):
        return None
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    return message if isinstance(message, dict) else None


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _translation_error(preview: str, from_reasoning: bool) -> ParseError:
    source = " (answer taken from reasoning_content)" if from_reasoning else ""
    return ParseError(
        f"Failed to parse translation data from AI content{source}. "
        f"Raw preview: {preview}",
        preview=preview,
    )
