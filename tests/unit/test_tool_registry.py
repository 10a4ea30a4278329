import pytest
from pydantic import BaseModel, Field

from santuri_mcp.errors import RemoteCallError, UnknownToolError
from santuri_mcp.tools.registry import ToolRegistry, ToolSpec
from santuri_mcp.types import ToolResult


class EchoInput(BaseModel):
    value: int = Field(ge=1)


async def _echo(data: EchoInput) -> ToolResult:
    return ToolResult.from_text(str(data.value))


def _echo_spec() -> ToolSpec:
    return ToolSpec(
        name="echo",
        description="echo positive int",
        args_schema=EchoInput,
        handler=_echo,
        action="echoing",
    )


@pytest.mark.asyncio
async def test_tool_registry_validation() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    ok = await registry.execute("echo", {"value": 3})
    assert ok.text == "3"
    assert not ok.is_error

    rejected = await registry.execute("echo", {"value": 0})
    assert rejected.is_error
    assert rejected.text.startswith("Error echoing: value:")
    assert len(rejected.content) == 1


def test_duplicate_tool_registration_rejected() -> None:
    registry = ToolRegistry()
    spec = _echo_spec()

    registry.register(spec)
    with pytest.raises(ValueError):
        registry.register(spec)


@pytest.mark.asyncio
async def test_unknown_tool_raises_on_execute_and_reports_on_dispatch() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    with pytest.raises(UnknownToolError):
        await registry.execute("get_weather", {})

    result = await registry.dispatch("get_weather", {"city": "Paris"})
    assert result.is_error
    assert result.text == "Unknown tool: get_weather"


@pytest.mark.asyncio
async def test_remote_errors_become_error_results() -> None:
    async def _failing(data: EchoInput) -> ToolResult:
        raise RemoteCallError("upstream unavailable", status_code=503)

    registry = ToolRegistry()
    registry.register(
        ToolSpec(
            name="flaky",
            description="always fails",
            args_schema=EchoInput,
            handler=_failing,
            action="calling flaky",
        )
    )

    result = await registry.dispatch("flaky", {"value": 1})

    assert result.is_error
    assert result.text == "Error calling flaky: upstream unavailable"


@pytest.mark.asyncio
async def test_missing_payload_is_validated_as_empty() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    result = await registry.dispatch("echo", None)

    assert result.is_error
    assert "value: Field required" in result.text


@pytest.mark.asyncio
async def test_langchain_export_runs_through_registry() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    (tool,) = registry.as_langchain_tools()

    assert tool.name == "echo"
    assert tool.description == "echo positive int"
    assert await tool.ainvoke({"value": 7}) == "7"
