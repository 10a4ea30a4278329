"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Base for payloads decoded from the Santuri API (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SearchResult(_WireModel):
    """One matched documentation snippet."""

    source_id: str
    source_name: str
    source_slug: str
    category: str | None = None
    title: str
    snippet: str
    score: float


class Usage(_WireModel):
    used: int
    limit: int


class SearchResponse(_WireModel):
    """Ranked results in the order the remote service returned them."""

    results: list[SearchResult]
    usage: Usage


class Source(_WireModel):
    """One documentation corpus descriptor."""

    id: str
    name: str
    slug: str
    category: str | None = None
    description: str | None = None
    content_url: str = Field(alias="llmsTxtUrl")


class SourcesResponse(_WireModel):
    sources: list[Source]


@dataclass(slots=True)
class TextContent:
    text: str
    type: Literal["text"] = "text"


@dataclass(slots=True)
class ToolResult:
    """Uniform tool output: content blocks plus an error flag."""

    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": block.type, "text": block.text} for block in self.content],
            "isError": self.is_error,
        }


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
    is_error: bool = False
