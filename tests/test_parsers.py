import pytest
from pydantic import BaseModel

from tool_chain_lib.chain_core import AssistantMessage, ToolCall, ToolCallArgsParser
from tool_chain_lib.chain_core.exceptions import OutputParserError


class ComplexArgs(BaseModel):
    int_arg: int
    float_arg: float
    dict_arg: dict


def _message(*calls: ToolCall) -> AssistantMessage:
    return AssistantMessage(content="", tool_calls=list(calls))


@pytest.mark.asyncio
async def test_first_tool_only_returns_args_of_named_tool() -> None:
    message = _message(
        ToolCall(name="other", args={"x": 1}, id="a"),
        ToolCall(name="complex_tool", args={"int_arg": 5}, id="b"),
    )
    parser = ToolCallArgsParser(key_name="complex_tool", first_tool_only=True)
    assert await parser.ainvoke(message) == {"int_arg": 5}


def test_list_output_without_key_name() -> None:
    message = _message(ToolCall(name="a", args={"x": 1}), ToolCall(name="b", args={"y": 2}))
    assert ToolCallArgsParser().parse(message) == [{"x": 1}, {"y": 2}]


def test_first_tool_only_without_match_returns_none() -> None:
    parser = ToolCallArgsParser(key_name="complex_tool", first_tool_only=True)
    assert parser.parse(AssistantMessage(content="Sorry, no tools.")) is None
    assert ToolCallArgsParser(key_name="complex_tool").parse(AssistantMessage(content="")) == []


def test_return_id() -> None:
    message = _message(ToolCall(name="complex_tool", args={"int_arg": 5}, id="call_1"))
    parser = ToolCallArgsParser(first_tool_only=True, return_id=True)
    assert parser.parse(message) == {"name": "complex_tool", "args": {"int_arg": 5}, "id": "call_1"}


def test_invalid_json_raises_with_raw_output() -> None:
    message = _message(
        ToolCall(name="complex_tool", id="call_1", raw_arguments='{"int_arg": 5,', error="Expecting value")
    )
    with pytest.raises(OutputParserError, match="are not valid JSON") as excinfo:
        ToolCallArgsParser(first_tool_only=True).parse(message)
    assert excinfo.value.llm_output == '{"int_arg": 5,'


def test_args_model_validation_failure_raises() -> None:
    raw = '{"int_arg": 5, "float_arg": 2.1, "dict_arg": "potato"}'
    message = _message(
        ToolCall(
            name="complex_tool",
            args={"int_arg": 5, "float_arg": 2.1, "dict_arg": "potato"},
            raw_arguments=raw,
        )
    )
    parser = ToolCallArgsParser(key_name="complex_tool", first_tool_only=True, args_model=ComplexArgs)

    with pytest.raises(OutputParserError, match="failed validation") as excinfo:
        parser.parse(message)
    assert excinfo.value.llm_output == raw


def test_args_model_returns_model_instance() -> None:
    message = _message(ToolCall(name="complex_tool", args={"int_arg": 5, "float_arg": 2.1, "dict_arg": {}}))
    parsed = ToolCallArgsParser(first_tool_only=True, args_model=ComplexArgs).parse(message)
    assert isinstance(parsed, ComplexArgs)
    assert parsed.int_arg == 5


def test_non_message_input_raises() -> None:
    with pytest.raises(OutputParserError):
        ToolCallArgsParser().parse("just text")  # type: ignore[arg-type]
