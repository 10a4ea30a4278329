"""Markdown rendering for search results and source catalogs.

Everything here is a pure function of its inputs so output can be checked
without any network access.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from santuri_mcp.types import SearchResponse, SearchResult, Source

UNCATEGORIZED = "Uncategorized"
RESULT_RULE = "---"


def scope_description(stack_id: str | None) -> str:
    return f"stack {stack_id}" if stack_id else "all sources"


def format_score(score: float) -> str:
    """Render a 0..1 relevance score as a whole percentage, halves rounding up."""
    return f"{math.floor(score * 100 + 0.5)}%"


def render_search_result(rank: int, result: SearchResult) -> str:
    lines = [
        f"## Result {rank}: {result.source_name}",
        "",
        f"**Source ID:** {result.source_id}",
        f"**Category:** {result.category or UNCATEGORIZED}",
        f"**Title:** {result.title}",
        f"**Relevance Score:** {format_score(result.score)}",
        "",
        result.snippet,
        "",
        RESULT_RULE,
    ]
    return "\n".join(lines)


def render_search_response(query: str, response: SearchResponse, stack_id: str | None) -> str:
    scope = scope_description(stack_id)
    usage = response.usage

    if not response.results:
        return (
            f'No results found for query: "{query}"\n\n'
            f"**Searched:** {scope}\n"
            f"**Usage:** {usage.used}/{usage.limit} searches used this month"
        )

    blocks = [
        render_search_result(rank, result)
        for rank, result in enumerate(response.results, start=1)
    ]
    header = (
        f'# Search Results for "{query}"\n\n'
        f"Found {len(response.results)} result(s) in {scope}\n"
        f"**Usage:** {usage.used}/{usage.limit} searches this month"
    )
    return header + "\n\n" + "\n\n".join(blocks)


def group_by_category(sources: Iterable[Source]) -> dict[str, list[Source]]:
    """Group sources by category in first-seen order, keeping input order inside groups."""
    groups: dict[str, list[Source]] = {}
    for source in sources:
        groups.setdefault(source.category or UNCATEGORIZED, []).append(source)
    return groups


def filter_by_category(sources: Iterable[Source], category: str | None) -> list[Source]:
    if category is None:
        return list(sources)
    return [source for source in sources if source.category == category]


def render_no_sources(stack_id: str | None, category: str | None) -> str:
    message = "No documentation sources available"
    if stack_id:
        message += f" in {scope_description(stack_id)}"
    if category is not None:
        message += f' with category "{category}"'
    return message


def render_source(source: Source) -> str:
    lines = [
        f"### {source.name}",
        f"- **ID:** `{source.id}`",
        f"- **Slug:** `{source.slug}`",
        f"- **URL:** {source.content_url}",
    ]
    if source.description:
        lines.append(f"- **Description:** {source.description}")
    return "\n".join(lines)


def render_sources(sources: list[Source], stack_id: str | None, category: str | None) -> str:
    if not sources:
        return render_no_sources(stack_id, category)

    count_line = f"**Sources:** {len(sources)}"
    if category is not None:
        count_line += f' (filtered by category "{category}")'
    parts = [
        "# Documentation Sources",
        "",
        f"**Stack:** {scope_description(stack_id)}",
        count_line,
        "",
    ]

    for group, members in group_by_category(sources).items():
        parts.append(f"## {group}")
        parts.append("")
        for source in members:
            parts.append(render_source(source))
            parts.append("")

    parts.append(RESULT_RULE)
    parts.append("")
    parts.append(
        "**Tip:** Use `search_documentation` to search across all these sources "
        "with a single query."
    )
    return "\n".join(parts)
