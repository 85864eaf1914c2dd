"""Unit tests for HttpTransportClient, driven through httpx.MockTransport."""

import base64
import itertools
import json

import httpx
import pytest

from llm_translator.domain.entities import ConversationTurn, Role
from llm_translator.domain.exceptions import TransportError
from llm_translator.infrastructure.http_transport import (
    MAX_TOKENS,
    TEMPERATURE,
    HttpTransportClient,
    is_timeout,
)

TURNS = [
    ConversationTurn(Role.SYSTEM, "You are a translator."),
    ConversationTurn(Role.USER, "こんにちは"),
]
OK_BODY = '{"choices": [{"message": {"content": "{\\"translation\\": \\"Hello\\"}"}}]}'


class RecordingHandler:
    """MockTransport handler replaying a script of responses / exceptions."""

    def __init__(self, *script):
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(step, type) and issubclass(step, Exception):
            raise step("simulated failure", request=request)
        return step


@pytest.fixture
def sleeps() -> list[float]:
    return []


def _client(config, handler, sleeps) -> HttpTransportClient:
    return HttpTransportClient(config, transport=httpx.MockTransport(handler), sleep=sleeps.append)


class TestRequestShape:
    def test_payload(self, config, sleeps):
        handler = RecordingHandler(httpx.Response(200, text=OK_BODY))
        _client(config, handler, sleeps).send(TURNS)

        body = json.loads(handler.requests[0].content)
        assert body == {
            "model": config.model,
            "messages": [
                {"role": "system", "content": "You are a translator."},
                {"role": "user", "content": "こんにちは"},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }
        assert TEMPERATURE == 0.1
        assert MAX_TOKENS == 5000

    def test_method_url_and_headers(self, config, sleeps):
        handler = RecordingHandler(httpx.Response(200, text=OK_BODY))
        _client(config, handler, sleeps).send(TURNS)

        request = handler.requests[0]
        expected = base64.b64encode(b"test-key").decode("ascii")
        assert request.method == "POST"
        assert str(request.url) == config.api_endpoint
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Authorization"] == f"Basic {expected}"

    def test_timeouts(self, config, sleeps):
        handler = RecordingHandler(httpx.Response(200, text=OK_BODY))
        _client(config, handler, sleeps).send(TURNS)

        timeout = handler.requests[0].extensions["timeout"]
        assert timeout["connect"] == 10.0
        assert timeout["read"] == 60.0
        assert timeout["write"] == 60.0
        assert timeout["pool"] == 60.0


class TestSend:
    def test_returns_raw_body(self, config, sleeps):
        handler = RecordingHandler(httpx.Response(200, text=OK_BODY))
        assert _client(config, handler, sleeps).send(TURNS) == OK_BODY
        assert len(handler.requests) == 1

    def test_timeout_then_success_retries_once(self, config, sleeps):
        handler = RecordingHandler(httpx.ReadTimeout, httpx.Response(200, text=OK_BODY))
        assert _client(config, handler, sleeps).send(TURNS) == OK_BODY
        assert len(handler.requests) == 2
        assert sleeps == [0.5]

    def test_connect_timeout_is_retried(self, config, sleeps):
        handler = RecordingHandler(httpx.ConnectTimeout, httpx.Response(200, text=OK_BODY))
        assert _client(config, handler, sleeps).send(TURNS) == OK_BODY
        assert len(handler.requests) == 2

    def test_timeout_exhausted(self, config, sleeps):
        handler = RecordingHandler(httpx.ReadTimeout)
        with pytest.raises(TransportError, match="simulated failure") as exc_info:
            _client(config, handler, sleeps).send(TURNS)
        assert len(handler.requests) == 2
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_connection_error_not_retried(self, config, sleeps):
        handler = RecordingHandler(httpx.ConnectError)
        with pytest.raises(TransportError, match="Failed to communicate"):
            _client(config, handler, sleeps).send(TURNS)
        assert len(handler.requests) == 1
        assert sleeps == []

    @pytest.mark.parametrize("status", [400, 401, 429, 500, 503, 504])
    def test_non_200_not_retried(self, config, sleeps, status):
        handler = RecordingHandler(httpx.Response(status, text="error"))
        with pytest.raises(TransportError, match=f"HTTP Code: {status}") as exc_info:
            _client(config, handler, sleeps).send(TURNS)
        assert exc_info.value.status_code == status
        assert len(handler.requests) == 1

    def test_other_2xx_is_an_error(self, config, sleeps):
        handler = RecordingHandler(httpx.Response(202, text=OK_BODY))
        with pytest.raises(TransportError) as exc_info:
            _client(config, handler, sleeps).send(TURNS)
        assert exc_info.value.status_code == 202


class TestIsTimeout:
    @pytest.mark.parametrize("exc_type", [httpx.ReadTimeout, httpx.ConnectTimeout, httpx.WriteTimeout, httpx.PoolTimeout])
    def test_timeouts(self, exc_type):
        assert is_timeout(exc_type("t"))

    def test_message_text_is_not_enough(self):
        assert not is_timeout(httpx.ConnectError("connection timeout"))
        assert not is_timeout(RuntimeError("timeout"))


class TestTotalDeadline:
    @staticmethod
    def _streaming_handler(requests: list[httpx.Request]):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, content=iter([b'{"choices": ', b"[]", b"}"]))

        return handler

    def test_slow_body_exceeds_deadline_and_is_retried(self, config, sleeps):
        requests: list[httpx.Request] = []
        ticks = itertools.count(0, 40)
        client = HttpTransportClient(
            config,
            transport=httpx.MockTransport(self._streaming_handler(requests)),
            sleep=sleeps.append,
            clock=lambda: next(ticks),
        )

        with pytest.raises(TransportError, match="total timeout of 60s") as exc_info:
            client.send(TURNS)

        assert len(requests) == 2
        assert sleeps == [0.5]
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_body_within_deadline_is_joined(self, config, sleeps):
        requests: list[httpx.Request] = []
        client = HttpTransportClient(
            config,
            transport=httpx.MockTransport(self._streaming_handler(requests)),
            sleep=sleeps.append,
            clock=lambda: 100.0,
        )

        assert client.send(TURNS) == '{"choices": []}'
        assert len(requests) == 1

    def test_deadline_follows_request_timeout(self, config, sleeps):
        requests: list[httpx.Request] = []
        ticks = itertools.count(0, 40)
        client = HttpTransportClient(
            config,
            request_timeout=500.0,
            transport=httpx.MockTransport(self._streaming_handler(requests)),
            sleep=sleeps.append,
            clock=lambda: next(ticks),
        )

        assert client.send(TURNS) == '{"choices": []}'
