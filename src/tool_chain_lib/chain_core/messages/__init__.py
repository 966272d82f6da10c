"""Expose provider-agnostic message model types shared by chat implementations."""

from .models import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCall,
    MessageInput,
    to_messages,
)

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCall",
    "MessageInput",
    "to_messages",
]
