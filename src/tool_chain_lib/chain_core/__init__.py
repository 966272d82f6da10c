"""Public exports for the core chain abstractions and utilities."""

from .logger import get_logger, setup_logging
from .exceptions import (
    ChainError,
    ConfigurationError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    OutputParserError,
)
from .config import ChatModelConfig, Settings
from .messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    ToolCall,
    to_messages,
)
from .runnables import Runnable, RunnableLambda, RunnableSequence, RunnableWithFallbacks, coerce_to_runnable
from .tools import (
    ToolDefinition,
    ToolRegistry,
    parameters_schema,
    ToolInvoker,
    ToolRunnable,
    build_tool_definition,
    tool,
)
from .parsers import ToolCallArgsParser
from .models import BaseChatModel
from .self_correction import exception_to_messages, self_correcting

__all__ = [
    "get_logger",
    "setup_logging",
    "ChainError",
    "ConfigurationError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "OutputParserError",
    "ChatModelConfig",
    "Settings",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolCall",
    "to_messages",
    "Runnable",
    "RunnableLambda",
    "RunnableSequence",
    "RunnableWithFallbacks",
    "coerce_to_runnable",
    "ToolDefinition",
    "ToolRegistry",
    "parameters_schema",
    "ToolInvoker",
    "ToolRunnable",
    "build_tool_definition",
    "tool",
    "ToolCallArgsParser",
    "BaseChatModel",
    "exception_to_messages",
    "self_correcting",
]
