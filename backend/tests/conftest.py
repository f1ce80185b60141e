"""
Shared fixtures: clean settings per test and a fake upstream built on
httpx.MockTransport, so no test ever reaches the network or sleeps.
"""

from typing import Callable, List

import httpx
import orjson
import pytest
from fastapi.testclient import TestClient

from relay.config import settings
from relay.main import app
from relay.utils.http import HttpClient, get_http_client

API_KEY_FIELDS = (
    "openai_api_key",
    "deepseek_api_key",
    "groq_api_key",
    "gemini_api_key",
    "glm_api_key",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test with no credentials and the default service."""
    for field in API_KEY_FIELDS:
        monkeypatch.setattr(settings, field, None)
    monkeypatch.setattr(settings, "chat_service_type", "groq")
    monkeypatch.setattr(settings, "provider_retries", 0)
    monkeypatch.setattr(settings, "request_timeout", 60.0)


class FakeUpstream:
    """Records outgoing requests and backoff delays, answers via a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self.delays: List[float] = []
        self._handler = handler
        self.client = HttpClient(transport=httpx.MockTransport(self._handle), sleep=self._sleep)

    def _handle(self, request: httpx.Request):
        self.requests.append(request)
        return self._handler(request)

    async def _sleep(self, delay: float) -> None:
        self.delays.append(delay)

    def json_body(self, index: int = -1) -> dict:
        return orjson.loads(self.requests[index].content)


@pytest.fixture
def upstream():
    """Factory: upstream(handler) -> FakeUpstream"""
    return FakeUpstream


def openai_reply(content) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def gemini_reply(text) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture
def api_client():
    """Factory: api_client(fake_upstream) -> TestClient wired to that upstream"""

    def _make(fake: FakeUpstream) -> TestClient:
        app.dependency_overrides[get_http_client] = lambda: fake.client
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
