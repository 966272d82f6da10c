"""Tool Chain Library - tool-calling chains over hosted chat models, with fallbacks."""

from .chain_core import (
    ChatModelConfig,
    Settings,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCall,
    ToolDefinition,
    ToolRegistry,
    ToolRunnable,
    ToolCallArgsParser,
    Runnable,
    RunnableLambda,
    RunnableSequence,
    RunnableWithFallbacks,
    ChainError,
    ConfigurationError,
    OutputParserError,
    ToolExecutionError,
    ToolValidationError,
    exception_to_messages,
    self_correcting,
    tool,
)
from .chain_impl.gemini import ChatGemini, GeminiToolRegistry
from .chain_impl.openai_api import ChatOpenAI, OpenAIToolRegistry

__all__ = [
    "ChatModelConfig",
    "Settings",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCall",
    "ToolDefinition",
    "ToolRegistry",
    "ToolRunnable",
    "ToolCallArgsParser",
    "Runnable",
    "RunnableLambda",
    "RunnableSequence",
    "RunnableWithFallbacks",
    "ChainError",
    "ConfigurationError",
    "OutputParserError",
    "ToolExecutionError",
    "ToolValidationError",
    "exception_to_messages",
    "self_correcting",
    "tool",
    "ChatGemini",
    "GeminiToolRegistry",
    "ChatOpenAI",
    "OpenAIToolRegistry",
]
