"""list_sources tool: the categorized catalog of documentation sources."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from santuri_mcp.client.api_client import ApiClient
from santuri_mcp.config import ConnectionConfig
from santuri_mcp.tools.registry import ToolSpec
from santuri_mcp.tools.render import filter_by_category, render_sources
from santuri_mcp.types import ToolResult

DESCRIPTION = (
    "List documentation sources available in the configured stack. "
    "Shows source IDs that can be used with search_documentation."
)


class ListSourcesInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: StrictStr | None = Field(
        default=None,
        description='Optional: Filter by category (e.g., "AI/ML", "Platform", "Database")',
    )


def build_list_sources_tool(client: ApiClient, config: ConnectionConfig) -> ToolSpec:
    async def _list_sources(input_data: ListSourcesInput) -> ToolResult:
        stack_id = config.stack_id
        category = input_data.category or None
        sources = await client.list_sources(stack_id=stack_id)
        selected = filter_by_category(sources, category)
        return ToolResult.from_text(render_sources(selected, stack_id, category))

    return ToolSpec(
        name="list_sources",
        description=DESCRIPTION,
        args_schema=ListSourcesInput,
        handler=_list_sources,
        action="listing sources",
        tags=["catalog"],
    )
