"""search_documentation tool: ranked snippet search through the Santuri API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig
from santuri_mcp.tools.registry import ToolSpec
from santuri_mcp.tools.render import render_search_response
from santuri_mcp.types import ToolResult

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

DESCRIPTION = (
    "Search documentation using RAG-style retrieval. Returns only relevant snippets "
    "(not full docs) to save tokens. Automatically searches within the configured "
    "documentation stack. Just provide your query - no need to specify technology names."
)


class SearchDocumentationInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    query: str = Field(
        min_length=1,
        description=(
            "Search query - use natural language or keywords to find relevant "
            "documentation sections"
        ),
    )
    limit: StrictInt = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description=f"Maximum number of results (1-{MAX_LIMIT}, default: {DEFAULT_LIMIT})",
    )


def build_search_tool(client: ApiClient, config: ConnectionConfig) -> ToolSpec:
    async def _search(input_data: SearchDocumentationInput) -> ToolResult:
        # Scope is fixed by configuration; callers cannot override it.
        stack_id = config.stack_id
        response = await client.search_documentation(
            input_data.query,
            stack_id=stack_id,
            limit=input_data.limit,
        )
        return ToolResult.from_text(
            render_search_response(input_data.query, response, stack_id)
        )

    return ToolSpec(
        name="search_documentation",
        description=DESCRIPTION,
        args_schema=SearchDocumentationInput,
        handler=_search,
        action="searching documentation",
        tags=["retrieval", "search"],
    )
