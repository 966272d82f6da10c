"""Render tool definitions as Gemini function declarations."""

from typing import List, Optional

from google.genai import types

from tool_chain_lib.chain_core import ToolRegistry
from .schema_sanitizer import sanitize


class GeminiToolRegistry(ToolRegistry):
    """
    A ToolRegistry for Google Gemini models.

    ``tool_object`` produces a ``types.Tool`` holding one function
    declaration per registered tool; ``tool_config`` translates a tool choice
    directive into Gemini's function calling configuration.
    """

    @property
    def tool_object(self) -> Optional[types.Tool]:
        """
        The registered tools as a single Gemini ``types.Tool``.

        Returns:
            A ``types.Tool`` with all function declarations, or None if no tools are registered.
        """
        if not self.tools:
            return None

        declarations = []
        for tool in self.tools.values():
            if tool.parameters:
                declarations.append(
                    types.FunctionDeclaration(
                        name=tool.name, description=tool.description, parameters=sanitize(tool.parameters)
                    )
                )
            else:
                declarations.append(types.FunctionDeclaration(name=tool.name, description=tool.description))

        return types.Tool(function_declarations=declarations)

    def tool_config(self, tool_choice: Optional[str]) -> Optional[types.ToolConfig]:
        """Translate a tool choice directive into a ``types.ToolConfig``.

        A tool name becomes mode ``ANY`` restricted to that function.
        """
        if tool_choice is None:
            return None

        allowed: Optional[List[str]] = None
        if tool_choice == "auto":
            mode = types.FunctionCallingConfigMode.AUTO
        elif tool_choice == "none":
            mode = types.FunctionCallingConfigMode.NONE
        elif tool_choice in ("any", "required"):
            mode = types.FunctionCallingConfigMode.ANY
        else:
            mode = types.FunctionCallingConfigMode.ANY
            allowed = [tool_choice]

        return types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode=mode, allowed_function_names=allowed)
        )
