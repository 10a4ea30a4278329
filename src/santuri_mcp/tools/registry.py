"""Tool registry and dispatcher built on Pydantic v2 models."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from time import perf_counter
from typing import Any

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from santuri_mcp.errors import SanturiError, UnknownToolError, describe_validation_error
from santuri_mcp.types import ToolResult, ToolTrace

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[ToolResult]]


class ToolSpec(BaseModel):
    """Declarative tool specification for registration and validation.

    `action` completes the "Error {action}: ..." prefix used when the call
    fails, e.g. "searching documentation".
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    args_schema: type[BaseModel]
    handler: ToolHandler
    action: str
    tags: list[str] = Field(default_factory=list)

    def input_schema(self) -> dict[str, Any]:
        schema = self.args_schema.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("required", [])
        return schema

    async def invoke(self, payload: dict[str, Any]) -> ToolResult:
        try:
            data = self.args_schema.model_validate(payload)
            return await self.handler(data)
        except ValidationError as exc:
            return ToolResult.failure(f"Error {self.action}: {describe_validation_error(exc)}")
        except SanturiError as exc:
            return ToolResult.failure(f"Error {self.action}: {exc}")


class ToolRegistry:
    """Stores tool specs, routes calls by name and exports LangChain tools."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._observer: Callable[[ToolTrace], None] | None = None

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def set_observer(self, observer: Callable[[ToolTrace], None] | None) -> None:
        """Set an optional callback invoked after each tool execution."""
        self._observer = observer

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)
        return spec

    async def execute(self, name: str, payload: dict[str, Any] | None = None) -> ToolResult:
        return await self._execute_spec(self.get(name), payload or {})

    async def dispatch(self, name: str, payload: dict[str, Any] | None = None) -> ToolResult:
        """Route one call; unknown names become an error result instead of raising."""
        try:
            spec = self.get(name)
        except UnknownToolError as exc:
            logger.warning("Rejected call to unknown tool %r", name)
            return ToolResult.failure(str(exc))
        return await self._execute_spec(spec, payload or {})

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def as_langchain_tools(self) -> list[StructuredTool]:
        tools: list[StructuredTool] = []
        for spec in self._tools.values():
            tools.append(
                StructuredTool.from_function(
                    name=spec.name,
                    description=spec.description,
                    args_schema=spec.args_schema,
                    coroutine=self._build_coroutine(spec),
                )
            )
        return tools

    def _build_coroutine(self, spec: ToolSpec) -> Callable[..., Awaitable[str]]:
        async def _callable(**kwargs: Any) -> str:
            result = await self._execute_spec(spec, kwargs)
            return result.text

        return _callable

    async def _execute_spec(self, spec: ToolSpec, payload: dict[str, Any]) -> ToolResult:
        start = perf_counter()
        result = await spec.invoke(payload)
        latency_ms = (perf_counter() - start) * 1000.0
        logger.info(
            "%s finished in %.1fms%s", spec.name, latency_ms, " (error)" if result.is_error else ""
        )

        if self._observer is not None:
            self._observer(
                ToolTrace(
                    name=spec.name,
                    input_payload=payload,
                    output_preview=result.text[:320],
                    latency_ms=latency_ms,
                    is_error=result.is_error,
                )
            )
        return result
