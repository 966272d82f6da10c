"""Convert between generic messages and Gemini content payloads."""

import json
from typing import Any, Dict, List, Optional, Tuple

from google.genai import types
from google.genai.types import GenerateContentResponse

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


def to_gemini_contents(messages: List[BaseMessage]) -> Tuple[Optional[str], List[types.Content]]:
    """
    Split generic messages into a system instruction and Gemini contents.

    Gemini takes system text as configuration rather than as a turn, so all
    system messages are joined into one instruction. Tool results are sent
    back as ``function_response`` parts on a user turn.

    Returns:
        The system instruction (or None) and the list of contents.
    """
    system_parts: List[str] = []
    contents: List[types.Content] = []

    for msg in messages:
        if isinstance(msg, SystemMessage):
            system_parts.append(msg.content)
        elif isinstance(msg, UserMessage):
            contents.append(types.Content(role="user", parts=[types.Part(text=msg.content)]))
        elif isinstance(msg, AssistantMessage):
            parts: List[types.Part] = []
            if msg.content:
                parts.append(types.Part(text=msg.content))
            for call in msg.tool_calls:
                parts.append(types.Part(function_call=types.FunctionCall(id=call.id, name=call.name, args=call.args)))
            contents.append(types.Content(role="model", parts=parts))
        elif isinstance(msg, ToolMessage):
            response = types.FunctionResponse(id=msg.tool_call_id, name=msg.name, response={"result": msg.content})
            contents.append(types.Content(role="user", parts=[types.Part(function_response=response)]))
        else:
            raise TypeError(f"Unsupported message type: {type(msg).__name__}")

    system_instruction = "\n\n".join(system_parts) if system_parts else None
    return system_instruction, contents


def from_gemini_response(response: GenerateContentResponse) -> AssistantMessage:
    """
    Builds an AssistantMessage from a Gemini response.

    Gemini returns function arguments as objects, so ``raw_arguments`` is
    their JSON dump, kept for error reporting.
    """
    if not response.candidates:
        logger.warning("Gemini response has no candidates.")
        return AssistantMessage(content="", raw=response)

    content = response.candidates[0].content
    parts = (content.parts if content else None) or []

    text = "".join(part.text for part in parts if part.text and not part.thought)
    tool_calls = [
        _to_tool_call(part.function_call.name, part.function_call.args, part.function_call.id)
        for part in parts
        if part.function_call is not None and part.function_call.name
    ]

    return AssistantMessage(content=text, tool_calls=tool_calls, raw=response)


def _to_tool_call(name: str, args: Optional[Dict[str, Any]], call_id: Optional[str]) -> ToolCall:
    args = dict(args or {})
    return ToolCall(name=name, args=args, id=call_id, raw_arguments=json.dumps(args, default=str))
