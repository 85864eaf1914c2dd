"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class TranslateRequest(BaseModel):
    """Request body for ``POST /translate``.

    Text checks (empty, over-long) are left to the domain so that they come
    back as 400 rather than 422.
    """

    text: str
    target: str = "english"
    source: str = "auto"
    is_literal: bool = False
    style: str = "standard"
    custom_prompt: str = ""


class TranslateResponse(BaseModel):
    """Successful response from ``POST /translate``.

    Only ``translation`` is guaranteed (the extractor rejects anything but a
    non-blank string).  The other keys are advisory and passed through in
    whatever shape the model returned them.
    """

    model_config = ConfigDict(extra="allow")

    translation: str
    detected_source: Any = None
    katakana: Any = None
    ruby_text: Any = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
