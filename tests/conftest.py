"""
Shared fixtures for TechDocGen backend tests.

The AI gateway is never contacted: ``get_client_factory`` is overridden so
every outbound call goes through an ``httpx.MockTransport`` backed by a
``FakeGateway`` that records requests and replays a canned response.
"""
from __future__ import annotations

import json
from typing import Any, AsyncGenerator, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.dependencies.gateway import get_client_factory
from app.main import app
from app.services.ai_gateway import AIGatewayClient

GATEWAY_URL = "https://gateway.test/v1"
TEST_API_KEY = "test-key"


def completion_body(content: str) -> Dict[str, Any]:
    """A minimal OpenAI-style chat completion."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


class FakeGateway:
    """Records every request and answers with the configured status/body."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = completion_body("# Generated docs")

    def respond_with(self, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body or "")

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_payload(self) -> Optional[Dict[str, Any]]:
        if not self.requests:
            return None
        return json.loads(self.requests[-1].content)

    def make_client(self) -> AIGatewayClient:
        return AIGatewayClient(
            api_key=TEST_API_KEY,
            base_url=GATEWAY_URL,
            model="test-model",
            transport=httpx.MockTransport(self.handler),
        )


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest_asyncio.fixture
async def client(gateway: FakeGateway) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the gateway client
    factory overridden to use the fake gateway.
    """

    app.dependency_overrides[get_client_factory] = lambda: gateway.make_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
