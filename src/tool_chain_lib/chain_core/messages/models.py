"""Provider-agnostic message models for chat requests and responses."""

from abc import ABC
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field


class ToolCall(BaseModel):
    """A tool invocation requested by the model.

    Attributes:
        name: Name of the requested tool.
        args: Decoded arguments. Empty when decoding failed.
        id: Provider-assigned call id, if any.
        raw_arguments: The arguments exactly as the provider returned them.
        error: Set when ``raw_arguments`` could not be decoded into an object.
    """

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None
    raw_arguments: Optional[str] = None
    error: Optional[str] = None


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with an LLM.

    Attributes:
        author: Role associated with the message.
        content: Text payload of the message.
    """

    author: str
    content: str = ""


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    author: str = "system"


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    author: str = "user"


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally containing tool calls.

    Attributes:
        tool_calls: Tool calls requested in this turn.
        raw: The provider response this message was built from.
    """

    author: str = "assistant"
    tool_calls: List[ToolCall] = Field(default_factory=list)
    raw: Any = Field(default=None, exclude=True, repr=False)


class ToolMessage(BaseMessage):
    """Message carrying the output of a tool invocation."""

    author: str = "tool"
    tool_call_id: Optional[str] = None
    name: str


MessageInput = Union[str, Sequence[BaseMessage], Dict[str, Any]]


def to_messages(value: MessageInput) -> List[BaseMessage]:
    """Normalize a chain input into a message list.

    Accepted inputs:

    * a prompt string, sent as a single user message;
    * a sequence of messages, used as-is;
    * a dict with an optional ``"system"`` string, an optional ``"input"``
      string and optional follow-up ``"messages"``. The user input comes
      before the follow-up messages so a failed attempt can be replayed
      after the original question.

    Raises:
        TypeError: If the input has none of the accepted shapes.
    """
    if isinstance(value, str):
        return [UserMessage(content=value)]

    if isinstance(value, dict):
        messages: List[BaseMessage] = []
        if value.get("system"):
            messages.append(SystemMessage(content=value["system"]))
        if value.get("input") is not None:
            messages.append(UserMessage(content=str(value["input"])))
        for msg in value.get("messages") or []:
            if not isinstance(msg, BaseMessage):
                raise TypeError(f"Expected BaseMessage in 'messages', got {type(msg).__name__}.")
            messages.append(msg)
        if not messages:
            raise TypeError("Dict input needs at least an 'input' or 'messages' entry.")
        return messages

    if isinstance(value, Sequence) and all(isinstance(m, BaseMessage) for m in value):
        return list(value)

    raise TypeError(f"Cannot convert {type(value).__name__} into chat messages.")
