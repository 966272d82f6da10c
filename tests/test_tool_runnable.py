import asyncio
from typing import Annotated

import pytest
from pydantic import Field

from tool_chain_lib.chain_core import (
    AssistantMessage,
    ToolCall,
    ToolCallArgsParser,
    ToolDefinition,
    ToolInvoker,
    ToolRunnable,
    tool,
)
from tool_chain_lib.chain_core.exceptions import ToolExecutionError, ToolNotFoundError, ToolValidationError


@tool
async def slow_tool(seconds: Annotated[float, Field(description="How long to sleep")]) -> str:
    """Sleeps."""
    await asyncio.sleep(seconds)
    return "done"


@tool
def failing_tool(reason: Annotated[str, Field(description="Why it fails")]) -> str:
    """Always fails."""
    raise RuntimeError(reason)


@pytest.mark.asyncio
async def test_tool_runnable_with_valid_args(complex_tool_def: ToolDefinition) -> None:
    runnable = ToolRunnable(complex_tool_def)
    result = await runnable.ainvoke({"int_arg": 5, "float_arg": 2.1, "dict_arg": {}})
    assert result == pytest.approx(10.5)


@pytest.mark.asyncio
async def test_tool_runnable_accepts_json_string(complex_tool_def: ToolDefinition) -> None:
    runnable = ToolRunnable(complex_tool_def)
    result = await runnable.ainvoke('{"int_arg": 2, "float_arg": 1.5, "dict_arg": {"a": 1}}')
    assert result == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_schema_violation_raises_with_raw_arguments(complex_tool_def: ToolDefinition) -> None:
    runnable = ToolRunnable(complex_tool_def)
    bad_args = {"int_arg": 5, "float_arg": 2.1, "dict_arg": "potato"}

    with pytest.raises(ToolValidationError) as excinfo:
        await runnable.ainvoke(bad_args)

    assert excinfo.value.tool_name == "complex_tool"
    assert excinfo.value.arguments == bad_args
    assert excinfo.value.tool_call is None
    assert "dict_arg" in str(excinfo.value)


@pytest.mark.asyncio
async def test_error_carries_tool_call_from_assistant_message(complex_tool_def: ToolDefinition) -> None:
    call = ToolCall(name="complex_tool", args={"int_arg": 5, "float_arg": 2.1, "dict_arg": "potato"}, id="call_1")
    message = AssistantMessage(content="", tool_calls=[call])

    with pytest.raises(ToolValidationError) as excinfo:
        await ToolRunnable(complex_tool_def).ainvoke(message)

    assert excinfo.value.tool_call == call


@pytest.mark.asyncio
async def test_assistant_message_without_matching_call(complex_tool_def: ToolDefinition) -> None:
    message = AssistantMessage(content="no tools today")
    with pytest.raises(ToolNotFoundError):
        await ToolRunnable(complex_tool_def).ainvoke(message)


@pytest.mark.asyncio
async def test_undecodable_tool_call_raises_validation_error(complex_tool_def: ToolDefinition) -> None:
    call = ToolCall(name="complex_tool", id="call_1", raw_arguments="{int_arg: 5", error="Expecting property name")
    with pytest.raises(ToolValidationError, match="Failed to parse arguments") as excinfo:
        await ToolRunnable(complex_tool_def).ainvoke(call)
    assert excinfo.value.arguments == "{int_arg: 5"


@pytest.mark.asyncio
async def test_handle_errors_returns_description(complex_tool_def: ToolDefinition) -> None:
    runnable = ToolRunnable(complex_tool_def, handle_errors=True)
    result = await runnable.ainvoke({"int_arg": 5, "float_arg": 2.1, "dict_arg": "potato"})

    assert isinstance(result, str)
    assert result.startswith("Calling tool with arguments:")
    assert "potato" in result
    assert "raised the following error" in result
    assert "ToolValidationError" in result


@pytest.mark.asyncio
async def test_tool_exception_is_wrapped() -> None:
    with pytest.raises(ToolExecutionError, match="boom") as excinfo:
        await ToolRunnable(failing_tool).ainvoke({"reason": "boom"})
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert excinfo.value.tool_name == "failing_tool"


@pytest.mark.asyncio
async def test_tool_timeout() -> None:
    runnable = ToolRunnable(slow_tool, tool_timeout=0.01)
    with pytest.raises(ToolExecutionError, match="timed out"):
        await runnable.ainvoke({"seconds": 1})


@pytest.mark.asyncio
async def test_async_tool_runs() -> None:
    assert await ToolRunnable(slow_tool).ainvoke({"seconds": 0}) == "done"


@pytest.mark.asyncio
async def test_invoker_rejects_non_object_json(complex_tool_def: ToolDefinition) -> None:
    with pytest.raises(ToolValidationError, match="JSON object"):
        await ToolInvoker().invoke(complex_tool_def, "[1, 2, 3]")


@pytest.mark.asyncio
async def test_invoker_without_args_model() -> None:
    definition = ToolDefinition(name="echo", description="Echo.", func=lambda text: text)
    assert await ToolInvoker().invoke(definition, {"text": "hi"}) == "hi"


@pytest.mark.asyncio
async def test_handle_errors_shows_raw_text_of_undecodable_call(complex_tool_def: ToolDefinition) -> None:
    raw = '{"int_arg": 5, "float_arg": 2.1, "dict_arg": potato'
    call = ToolCall(name="complex_tool", id="call_1", raw_arguments=raw, error="Expecting value")

    result = await ToolRunnable(complex_tool_def, handle_errors=True).ainvoke(call)

    assert raw in result
    assert "Failed to parse arguments" in result


@pytest.mark.asyncio
async def test_list_of_arguments_is_rejected(complex_tool_def: ToolDefinition) -> None:
    message = AssistantMessage(
        content="",
        tool_calls=[ToolCall(name="complex_tool", args={"int_arg": 5, "float_arg": 2.1, "dict_arg": {}}, id="a")],
    )
    chain = ToolCallArgsParser(key_name="complex_tool") | complex_tool_def

    with pytest.raises(ToolValidationError, match="must be an object, got list") as excinfo:
        await chain.ainvoke(message)

    assert excinfo.value.arguments == [{"int_arg": 5, "float_arg": 2.1, "dict_arg": {}}]


@pytest.mark.asyncio
async def test_parsed_model_feeds_the_tool(complex_tool_def: ToolDefinition) -> None:
    message = AssistantMessage(
        content="",
        tool_calls=[ToolCall(name="complex_tool", args={"int_arg": 2, "float_arg": 1.5, "dict_arg": {}}, id="a")],
    )
    parser = ToolCallArgsParser(key_name="complex_tool", first_tool_only=True, args_model=complex_tool_def.args_model)

    assert await (parser | complex_tool_def).ainvoke(message) == pytest.approx(3.0)
