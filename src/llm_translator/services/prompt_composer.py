"""Prompt composer — deterministic system prompt and turn sequence.

The same :class:`TranslationRequest` always yields the same system prompt.
The prompt is assembled from four independent instructions, always in
this order:

1. **Role**: who the model is (detector + translator, or a fixed pair).
2. **Format**: the JSON contract the reply must follow.
3. **Mode**: literal vs. natural translation.
4. **Style**: register / dialect / script, or a caller-supplied instruction.

Format is stated before style so that the model treats the machine-readable
structure as the higher priority.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from llm_translator.domain.entities import ConversationTurn, Role
from llm_translator.domain.value_objects import TranslationRequest

# ── Lookup tables ───────────────────────────────────────────────────────────

LANGUAGE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "auto": "Autodetect",
        "japanese": "Japanese",
        "english": "English",
        "french": "French",
        "korean": "Korean",
        "chinese": "Chinese",
    }
)


@dataclass(frozen=True, slots=True)
class StyleTable:
    """Style identifier → instruction, with the text used for anything else."""

    styles: Mapping[str, str]
    fallback: str = ""

    def lookup(self, style: str) -> str:
        return self.styles.get(style, self.fallback)


STYLE_TABLES: Mapping[str, StyleTable] = MappingProxyType(
    {
        "japanese": StyleTable(
            styles=MappingProxyType(
                {
                    "casual": "Use casual, informal Japanese (tameguchi).",
                    "polite": "Use formal, polite Japanese (keigo).",
                    "academic": "Use academic, objective Japanese (da/dearu style).",
                    "kansai": "Use Kansai dialect (Kansai-ben).",
                }
            ),
            fallback="Use standard Japanese.",
        ),
        "english": StyleTable(
            styles=MappingProxyType(
                {
                    "american": "Use American English (US) spelling and idioms.",
                    "british": "Use British English (UK) spelling and idioms.",
                    "middle_school": (
                        "Use simple English suitable for a Japanese junior high "
                        "school student."
                    ),
                }
            ),
        ),
        "chinese": StyleTable(
            styles=MappingProxyType(
                {"traditional": "Use Traditional Chinese characters (繁體字)."}
            ),
            fallback="Use Simplified Chinese characters (簡体字).",
        ),
    }
)

# ── Fixed instruction texts ─────────────────────────────────────────────────

LITERAL_INSTRUCTION = (
    "Priority: Strict literal translation (choku-yaku / 直訳). Maintain source "
    "structure and nuances exactly, even if it sounds unnatural."
)
NATURAL_INSTRUCTION = (
    "Priority: Natural translation (i-yaku / 意訳). Focus on flow, common "
    "expressions, and context-appropriate vocabulary."
)


class OutputFormat(str, Enum):
    """JSON contract demanded from the model."""

    DETECT_AND_TRANSLATE = "detect_and_translate"  # {detected_source, translation}
    TRANSLATION_ONLY = "translation_only"  # {translation}
    ANNOTATED = "annotated"  # {translation, katakana, ruby_text}


_FORMAT_INSTRUCTIONS: Mapping[OutputFormat, str] = MappingProxyType(
    {
        OutputFormat.DETECT_AND_TRANSLATE: (
            "Output ONLY a valid JSON object with 'detected_source' and "
            "'translation' keys. {\"detected_source\": \"detected language id "
            "(e.g., english)\", \"translation\": \"...\"}"
        ),
        OutputFormat.TRANSLATION_ONLY: (
            "Output ONLY a valid JSON object with a 'translation' key. "
            "{\"translation\": \"...\"}"
        ),
        OutputFormat.ANNOTATED: (
            "Output ONLY a JSON object. NO THINKING. NO EXPLANATION. JSON keys: "
            "'translation', 'katakana', 'ruby_text'. 'ruby_text' format: "
            "word{pronunciation}. Output JSON as a SINGLE LINE."
        ),
    }
)

# One-shot exchange that anchors the ANNOTATED reply shape.
EXAMPLE_USER_TEXT = "ありがとう"
EXAMPLE_ASSISTANT_REPLY = (
    '{"translation": "Thank you", "katakana": "テン キュー", '
    '"ruby_text": "Thank{テン} you{キュー}"}'
)

_JAPANESE = "japanese"
_CUSTOM_STYLE = "custom"


# ── Classification ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PromptProfile:
    """Everything the instruction builders branch on, resolved once."""

    target_name: str
    source_name: str
    auto_detect: bool
    output_format: OutputFormat
    custom_style: bool


def language_display_name(identifier: str) -> str:
    """Human-readable name for a language id; unknown ids get a capital first letter."""
    if identifier in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[identifier]
    return identifier[:1].upper() + identifier[1:]


def uses_custom_style(request: TranslationRequest) -> bool:
    return request.style == _CUSTOM_STYLE and bool(request.custom_prompt)


def output_format_for(target_language: str, source_language: str) -> OutputFormat:
    if target_language != _JAPANESE:
        return OutputFormat.ANNOTATED
    if source_language == "auto":
        return OutputFormat.DETECT_AND_TRANSLATE
    return OutputFormat.TRANSLATION_ONLY


def classify(request: TranslationRequest) -> PromptProfile:
    """Reduce a request to the variant that drives prompt composition."""
    return PromptProfile(
        target_name=language_display_name(request.target_language),
        source_name=language_display_name(request.source_language),
        auto_detect=request.auto_detect,
        output_format=output_format_for(
            request.target_language, request.source_language
        ),
        custom_style=uses_custom_style(request),
    )


# ── Instruction builders ────────────────────────────────────────────────────


def role_statement(profile: PromptProfile) -> str:
    if profile.auto_detect:
        return (
            "You are a language detection and translation API. First, identify "
            "the language of the user's text. Then, translate it to "
            f"{profile.target_name}."
        )
    return f"You are a {profile.source_name}-to-{profile.target_name} translator API."


def format_instruction(output_format: OutputFormat) -> str:
    return _FORMAT_INSTRUCTIONS[output_format]


def mode_instruction(is_literal: bool) -> str:
    return LITERAL_INSTRUCTION if is_literal else NATURAL_INSTRUCTION


def lookup_style(target_language: str, style: str) -> str:
    """Style instruction from the per-language tables; ``""`` when none applies."""
    table = STYLE_TABLES.get(target_language)
    if table is None:
        return ""
    return table.lookup(style)


def style_instruction(request: TranslationRequest) -> str:
    """A non-empty custom prompt replaces every table-driven style."""
    if uses_custom_style(request):
        return f"Special Instruction: {request.custom_prompt}"
    return lookup_style(request.target_language, request.style)


# ── Assembly ────────────────────────────────────────────────────────────────


def compose_system_prompt(request: TranslationRequest) -> str:
    """Join role, format, mode and style instructions, one per line."""
    profile = classify(request)
    parts = [
        role_statement(profile),
        format_instruction(profile.output_format),
        mode_instruction(request.is_literal),
        style_instruction(request),
    ]
    return "\n".join(part for part in parts if part)


def build_turns(request: TranslationRequest) -> list[ConversationTurn]:
    """Build the full conversation sent to the model.

    Japanese targets skip the one-shot example: their reply schema differs
    from the annotated one the example demonstrates.
    """
    turns = [ConversationTurn(Role.SYSTEM, compose_system_prompt(request))]

    if request.target_language != _JAPANESE:
        turns.append(ConversationTurn(Role.USER, EXAMPLE_USER_TEXT))
        turns.append(ConversationTurn(Role.ASSISTANT, EXAMPLE_ASSISTANT_REPLY))

    turns.append(ConversationTurn(Role.USER, request.text))
    return turns
