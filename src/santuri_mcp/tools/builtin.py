"""Registration of the built-in Santuri tools."""

from __future__ import annotations

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig
from santuri_mcp.tools.registry import ToolRegistry
from santuri_mcp.tools.search import build_search_tool
from santuri_mcp.tools.sources import build_list_sources_tool


def register_builtin_tools(
    registry: ToolRegistry,
    client: ApiClient,
    config: ConnectionConfig | None = None,
) -> None:
    """Register the default tool set.

    Tools:
    - `search_documentation`: ranked snippet search within the configured stack.
    - `list_sources`: sources in the configured stack, grouped by category.

    `config` defaults to the client's own settings.
    """

    resolved = config or client.config
    registry.register(build_search_tool(client, resolved))
    registry.register(build_list_sources_tool(client, resolved))
