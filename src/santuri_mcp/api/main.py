"""FastAPI entrypoint exposing the Santuri tools, traces and metrics over HTTP."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from fastapi import Body, FastAPI, HTTPException

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig, get_config
from santuri_mcp.errors import UnknownToolError
from santuri_mcp.obs.tracing import TraceStore
from santuri_mcp.tools.builtin import register_builtin_tools
from santuri_mcp.tools.registry import ToolRegistry


def create_app(
    config: ConnectionConfig | None = None,
    *,
    client: ApiClient | None = None,
) -> FastAPI:
    """Build the HTTP app; settings come from the environment unless given."""

    resolved = config or (client.config if client is not None else get_config())
    api_client = client or ApiClient(resolved)
    registry = ToolRegistry()
    register_builtin_tools(registry, api_client, resolved)
    trace_store = TraceStore()
    registry.set_observer(trace_store.record)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            if client is None:
                await api_client.aclose()

    app = FastAPI(title="Santuri Documentation Tools", version="1.0.0", lifespan=lifespan)

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "api_url": resolved.api_url,
            "mode": "authenticated" if resolved.authenticated else "anonymous",
            "stack_id": resolved.stack_id,
            "trace_count": len(trace_store.list_recent(limit=1000)),
        }

    @app.get("/tools")
    def tools() -> dict[str, Any]:
        return {
            "items": [
                {
                    "name": spec.name,
                    "description": spec.description,
                    "input_schema": spec.input_schema(),
                    "tags": spec.tags,
                }
                for spec in registry.specs()
            ]
        }

    @app.post("/tools/{name}")
    async def call_tool(
        name: str,
        arguments: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, Any]:
        try:
            result = await registry.execute(name, arguments)
        except UnknownToolError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return result.to_dict()

    @app.get("/traces")
    def traces(limit: int = 20) -> dict[str, Any]:
        return {"items": [asdict(record) for record in trace_store.list_recent(limit=limit)]}

    @app.get("/traces/{trace_id}")
    def trace_detail(trace_id: str) -> dict[str, Any]:
        try:
            record = trace_store.get(trace_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return asdict(record)

    @app.get("/metrics")
    def metrics() -> dict[str, Any]:
        return trace_store.summary()

    return app
