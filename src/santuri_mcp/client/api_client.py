"""Async HTTP gateway to the Santuri documentation API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from santuri_mcp.config import ConnectionConfig
from santuri_mcp.errors import RemoteCallError
from santuri_mcp.types import SearchResponse, Source, SourcesResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SEARCH_PATH = "/api/mcp/search"
SOURCES_PATH = "/api/mcp/sources"


class ApiClient:
    """Issues one authenticated request per operation and decodes the reply.

    Every failure surfaces as `RemoteCallError`: non-2xx statuses, transport
    errors and timeouts, and success bodies that do not match the expected
    model. An injected `httpx.AsyncClient` is left open on `aclose()`.
    """

    USER_AGENT = "santuri-mcp/1.0"

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.USER_AGENT,
        }
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        response_model: type[ModelT],
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> ModelT:
        url = f"{self.config.api_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._get_client().request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, url)
            raise RemoteCallError(
                f"API request timed out after {self.config.timeout_seconds:g}s"
            ) from exc
        except httpx.InvalidURL as exc:
            raise RemoteCallError(f"Invalid API URL {url!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise RemoteCallError(f"API request failed: {exc}") from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning("%s %s returned %d: %s", method, url, response.status_code, message)
            raise RemoteCallError(message, status_code=response.status_code)

        try:
            return response_model.model_validate(response.json())
        except ValueError as exc:
            # json decoding and pydantic ValidationError are both ValueErrors.
            detail = _describe_decode_error(exc)
            raise RemoteCallError(
                f"Unexpected response from {path}: {detail}",
                status_code=response.status_code,
            ) from exc

    def resolve_stack_id(self, stack_id: str | None = None) -> str | None:
        return stack_id or self.config.stack_id

    async def search_documentation(
        self,
        query: str,
        *,
        stack_id: str | None = None,
        limit: int = 10,
    ) -> SearchResponse:
        body: dict[str, Any] = {"query": query, "limit": limit}
        effective_stack = self.resolve_stack_id(stack_id)
        if effective_stack:
            body["stackId"] = effective_stack
        return await self.request("POST", SEARCH_PATH, response_model=SearchResponse, json=body)

    async def list_sources(self, *, stack_id: str | None = None) -> list[Source]:
        effective_stack = self.resolve_stack_id(stack_id)
        params = {"stackId": effective_stack} if effective_stack else None
        response = await self.request(
            "GET", SOURCES_PATH, response_model=SourcesResponse, params=params
        )
        return response.sources

    async def get_source(self, id_or_slug: str, *, stack_id: str | None = None) -> Source | None:
        """Find one source by id or slug within the active stack.

        Returns None only when no source matches; a failed listing raises
        `RemoteCallError` rather than being reported as "not found".
        """
        for source in await self.list_sources(stack_id=stack_id):
            if id_or_slug in (source.id, source.slug):
                return source
        return None


def _error_message(response: httpx.Response) -> str:
    fallback = f"API request failed with status {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        for key in ("error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


def _describe_decode_error(exc: ValueError) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return f"{location or 'body'}: {first.get('msg', 'invalid value')}"
    return "body is not valid JSON"
