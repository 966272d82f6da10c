"""Export the exception hierarchy used across tool binding, parsing and execution."""

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

__all__ = [
    "ChainError",
    "ConfigurationError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "OutputParserError",
]
