"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class TranslatorError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(TranslatorError):
    """The client was constructed with unusable settings (e.g. empty API key)."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidInputError(TranslatorError):
    """The translation request failed local validation and was never sent."""


# ── Remote service errors ───────────────────────────────────────────────────


class TransportError(TranslatorError):
    """No usable HTTP response was obtained from the translation service.

    ``status_code`` is set when the service answered with a non-200 status
    and is ``None`` for network-level failures.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(TranslatorError):
    """The service answered, but its payload could not be turned into a result.

    ``preview`` holds a bounded excerpt of the offending text.
    """

    def __init__(self, message: str, *, preview: str = "") -> None:
        super().__init__(message)
        self.preview = preview
