"""Tool definitions, schema generation, registries and execution."""

from .models import ToolDefinition
from .schema import build_tool_definition, parameters_schema, tool
from .registry import ToolRegistry, ToolLike
from .execution import ToolInvoker, ToolRunnable

__all__ = [
    "ToolDefinition",
    "parameters_schema",
    "build_tool_definition",
    "tool",
    "ToolRegistry",
    "ToolLike",
    "ToolInvoker",
    "ToolRunnable",
]
