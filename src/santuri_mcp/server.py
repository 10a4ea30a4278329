"""Santuri MCP server: stdio transport entrypoint for the documentation tools."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl, ValidationError

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig, ServerConfig, get_config
from santuri_mcp.obs.tracing import TraceStore
from santuri_mcp.tools.builtin import register_builtin_tools
from santuri_mcp.tools.registry import ToolRegistry
from santuri_mcp.types import ToolResult

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [santuri] %(levelname)s %(name)s: %(message)s"


def build_tool_definitions(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=spec.input_schema(),
        )
        for spec in registry.specs()
    ]


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in result.content],
        isError=result.is_error,
    )


def create_server(
    registry: ToolRegistry,
    server_config: ServerConfig | None = None,
) -> Server:
    """Wire tool and resource handlers onto a low-level MCP server."""
    settings = server_config or ServerConfig()
    server: Server = Server(settings.name, version=settings.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return build_tool_definitions(registry)

    # Arguments are validated by each tool's pydantic schema so failures
    # come back as readable "Error ..." results.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        logger.info("%s called with: %s", name, arguments or {})
        result = await registry.dispatch(name, arguments)
        return to_call_tool_result(result)

    # Content is only reachable through search_documentation.
    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return []

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> str:
        raise ValueError(f"Resource not found: {uri}. Use search_documentation to find content.")

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return []

    return server


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol; logs must go to stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def log_startup(config: ConnectionConfig) -> None:
    logger.info("Santuri MCP server initialized")
    logger.info("  API URL: %s", config.api_url)
    logger.info("  Mode: %s", "authenticated" if config.authenticated else "anonymous (rate-limited)")
    logger.info("  Stack ID: %s", config.stack_id or "not configured (using all sources)")


async def serve(config: ConnectionConfig, server_config: ServerConfig | None = None) -> None:
    registry = ToolRegistry()
    traces = TraceStore()
    registry.set_observer(traces.record)

    async with ApiClient(config) as client:
        register_builtin_tools(registry, client, config)
        server = create_server(registry, server_config)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Santuri MCP server started")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    server_config = ServerConfig()
    configure_logging(server_config.log_level)
    try:
        config = get_config()
    except ValidationError as exc:
        logger.error("Failed to initialize: %s", exc)
        sys.exit(1)

    log_startup(config)
    try:
        asyncio.run(serve(config, server_config))
    except KeyboardInterrupt:
        logger.info("Santuri MCP server stopped")


if __name__ == "__main__":
    main()
