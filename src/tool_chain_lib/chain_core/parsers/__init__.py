"""Output parsers for model responses."""

from .tool_output import ToolCallArgsParser

__all__ = ["ToolCallArgsParser"]
