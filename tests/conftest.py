"""
Shared pytest fixtures for the translator test suite.

- ``make_envelope`` builds chat-completions response bodies.
- ``StubTransport`` stands in for the HTTP adapter and records every call.
"""

import json
from collections.abc import Sequence

import pytest

from llm_translator.domain.entities import ConversationTurn
from llm_translator.domain.value_objects import ClientConfig
from llm_translator.services.translation_processor import TranslationRequestProcessor


def build_envelope(content=None, reasoning_content=None) -> str:
    """Serialise a minimal OpenAI-compatible chat-completions response."""
    message = {"role": "assistant"}
    if content is not None:
        message["content"] = content
    if reasoning_content is not None:
        message["reasoning_content"] = reasoning_content
    return json.dumps(
        {"id": "chatcmpl-test", "choices": [{"index": 0, "message": message}]},
        ensure_ascii=False,
    )


class StubTransport:
    """Transport double: returns a fixed body (or raises) and records calls."""

    def __init__(self, body: str = "", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.calls: list[list[ConversationTurn]] = []

    def send(self, turns: Sequence[ConversationTurn]) -> str:
        self.calls.append(list(turns))
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def make_envelope():
    return build_envelope


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key", api_endpoint="https://llm.test/v1/chat/completions")


@pytest.fixture
def stub_transport() -> StubTransport:
    return StubTransport(body=build_envelope(content='{"translation": "Hello"}'))


@pytest.fixture
def processor(stub_transport: StubTransport) -> TranslationRequestProcessor:
    return TranslationRequestProcessor(stub_transport)


@pytest.fixture
def transport_factory():
    return StubTransport
