"""
Custom exception classes for the tool chain library.

Tool errors cover discovery, registration, argument validation and execution.
Parser errors are raised when a model's output cannot be turned into tool
arguments. Both keep the offending raw output so a fallback chain (or a
self-correcting retry) can see what the model actually produced.
"""

from typing import Any, Optional


class ChainError(Exception):
    """Base exception for all errors raised by the library."""

    pass


class ConfigurationError(ChainError):
    """Raised when a required setting (e.g. an API key) is missing."""

    pass


class LLMToolError(ChainError):
    """Base exception for all tool-related errors.

    Attributes:
        tool_name: Name of the tool involved, if known.
        arguments: The raw arguments the tool was called with.
        tool_call: The model's tool call that led to the error, if the failing
            step received one.
    """

    def __init__(
        self,
        message: str,
        *,
        tool_name: Optional[str] = None,
        arguments: Any = None,
        tool_call: Any = None,
    ) -> None:
        super().__init__(message)
        self.tool_name = tool_name
        self.arguments = arguments
        self.tool_call = tool_call


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class OutputParserError(ChainError):
    """Raised when a model response cannot be parsed into tool arguments.

    Attributes:
        llm_output: The raw model output that failed to parse.
    """

    def __init__(self, message: str, *, llm_output: Any = None) -> None:
        super().__init__(message)
        self.llm_output = llm_output
