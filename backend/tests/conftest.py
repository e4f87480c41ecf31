import json
from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from wingman.config import get_settings
from wingman.core.openrouter import OpenRouterClient, get_completion_client
from wingman.main import app


class FakeOpenRouter:
    """Stands in for the OpenRouter API; records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: dict = {"choices": [{"message": {"role": "assistant", "content": "Ask her about the concert."}}]}
        self.error: Exception | None = None

    def reply_with(self, content: str | None) -> None:
        self.body = {"choices": [{"message": {"role": "assistant", "content": content}}]}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


class MemorySlot:
    """Dict-backed cookie slot."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.expiry: dict[str, datetime] = {}

    def get(self, name):
        return self.values.get(name)

    def set(self, name, value, expires):
        self.values[name] = value
        self.expiry[name] = expires

    def delete(self, name):
        self.values.pop(name, None)
        self.expiry.pop(name, None)

    def items(self):
        return iter(list(self.values.items()))


@pytest.fixture
def upstream() -> FakeOpenRouter:
    return FakeOpenRouter()


@pytest.fixture
def client(upstream):
    transport = httpx.MockTransport(upstream.handler)
    app.dependency_overrides[get_completion_client] = lambda: OpenRouterClient(
        get_settings(), transport=transport
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def memory_slot() -> MemorySlot:
    return MemorySlot()
