"""Tool schema generation."""

from .json_schema import find_reference_cycle, parameters_schema, tidy_schema
from .builder import build_tool_definition, tool

__all__ = ["find_reference_cycle", "parameters_schema", "tidy_schema", "build_tool_definition", "tool"]
