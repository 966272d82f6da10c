"""Convert between generic messages and OpenAI chat completion payloads."""

import json
from typing import Any, Dict, List

from openai.types.chat import ChatCompletion

from tool_chain_lib.chain_core import (
    AssistantMessage,
    BaseMessage,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
    get_logger,
)

logger = get_logger(__name__)


def to_openai_messages(messages: List[BaseMessage]) -> List[Dict[str, Any]]:
    """
    Converts generic messages into OpenAI message dictionaries.

    Args:
        messages: List of BaseMessage objects.

    Returns:
        List of OpenAI message dictionaries.
    """
    openai_messages: List[Dict[str, Any]] = []
    for msg in messages:
        if isinstance(msg, SystemMessage):
            openai_messages.append({"role": "system", "content": msg.content})
        elif isinstance(msg, UserMessage):
            openai_messages.append({"role": "user", "content": msg.content})
        elif isinstance(msg, AssistantMessage):
            openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content or None}
            if msg.tool_calls:
                openai_msg["tool_calls"] = [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {
                            "name": call.name,
                            "arguments": _encode_arguments(call),
                        },
                    }
                    for call in msg.tool_calls
                ]
            openai_messages.append(openai_msg)
        elif isinstance(msg, ToolMessage):
            openai_messages.append({"role": "tool", "tool_call_id": msg.tool_call_id, "content": msg.content})
        else:
            raise TypeError(f"Unsupported message type: {type(msg).__name__}")
    return openai_messages


def from_openai_response(response: ChatCompletion) -> AssistantMessage:
    """
    Builds an AssistantMessage from a chat completion.

    Tool-call arguments are decoded from JSON. Arguments that don't decode
    into an object are kept raw on the ToolCall with ``error`` set, so the
    parser can report exactly what the model sent.

    Args:
        response: The chat completion returned by OpenAI.

    Returns:
        The assistant reply, with ``raw`` set to ``response``.
    """
    if not response.choices:
        logger.warning("OpenAI response has no choices.")
        return AssistantMessage(content="", raw=response)

    message = response.choices[0].message
    tool_calls: List[ToolCall] = []
    for tool_call in message.tool_calls or []:
        if tool_call.type != "function":
            continue
        raw_arguments = tool_call.function.arguments
        tool_calls.append(_decode_tool_call(tool_call.function.name, raw_arguments, tool_call.id))

    return AssistantMessage(content=message.content or "", tool_calls=tool_calls, raw=response)


def _decode_tool_call(name: str, raw_arguments: str, call_id: str) -> ToolCall:
    if not raw_arguments:
        return ToolCall(name=name, args={}, id=call_id, raw_arguments=raw_arguments)
    try:
        parsed = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        logger.warning(f"Could not decode arguments of '{name}': {exc}")
        return ToolCall(name=name, id=call_id, raw_arguments=raw_arguments, error=str(exc))

    if not isinstance(parsed, dict):
        msg = f"Arguments must decode to a JSON object, got {type(parsed).__name__}."
        logger.warning(f"Could not decode arguments of '{name}': {msg}")
        return ToolCall(name=name, id=call_id, raw_arguments=raw_arguments, error=msg)

    return ToolCall(name=name, args=parsed, id=call_id, raw_arguments=raw_arguments)


def _encode_arguments(call: ToolCall) -> str:
    # Replay exactly what the model sent, even if it was malformed
    if call.raw_arguments is not None:
        return call.raw_arguments
    return json.dumps(call.args)
