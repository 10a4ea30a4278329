import json
from typing import Any

import httpx
import pytest

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig, reset_config

ANTHROPIC_HIT = {
    "sourceId": "anthropic",
    "sourceName": "Anthropic",
    "sourceSlug": "anthropic",
    "category": "AI/ML",
    "title": "Test Result",
    "snippet": "This is a test result",
    "score": 0.95,
}

SOURCES = [
    {
        "id": "anthropic",
        "name": "Anthropic",
        "slug": "anthropic",
        "category": "AI/ML",
        "description": "Anthropic documentation",
        "llmsTxtUrl": "https://docs.anthropic.com/llms-full.txt",
    },
    {
        "id": "vercel",
        "name": "Vercel",
        "slug": "vercel",
        "category": "Platform",
        "description": "Vercel documentation",
        "llmsTxtUrl": "https://vercel.com/llms-full.txt",
    },
]


class FakeSanturiApi:
    """Scripted stand-in for the remote API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.search_results: dict[str, list[dict[str, Any]]] = {"test query": [ANTHROPIC_HIT]}
        self.sources: list[dict[str, Any]] = list(SOURCES)
        self.usage = {"used": 10, "limit": 100}
        self.failure: tuple[int, dict[str, Any]] | None = None

    def fail_with(self, status_code: int, **kwargs: Any) -> None:
        self.failure = (status_code, kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure is not None:
            status_code, kwargs = self.failure
            return httpx.Response(status_code, **kwargs)
        if request.url.path == "/api/mcp/search":
            body = json.loads(request.content)
            results = self.search_results.get(body["query"], [])
            return httpx.Response(200, json={"results": results, "usage": self.usage})
        if request.url.path == "/api/mcp/sources":
            return httpx.Response(200, json={"sources": self.sources})
        return httpx.Response(404, json={"error": f"No route for {request.url.path}"})

    def client(self, config: ConnectionConfig) -> ApiClient:
        transport = httpx.MockTransport(self.handler)
        return ApiClient(config, client=httpx.AsyncClient(transport=transport))

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def _isolated_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> ConnectionConfig:
    return ConnectionConfig(
        api_key="test-api-key",
        api_url="http://localhost:3000",
        stack_id="test-stack-id",
    )


@pytest.fixture
def santuri_api() -> FakeSanturiApi:
    return FakeSanturiApi()
