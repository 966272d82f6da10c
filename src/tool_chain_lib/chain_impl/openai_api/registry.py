"""Render tool definitions in the OpenAI chat completions format."""

from typing import Any, Dict, List, Optional, Union

from openai.types.chat import ChatCompletionToolParam

from tool_chain_lib.chain_core import ToolRegistry


class OpenAIToolRegistry(ToolRegistry):
    """
    A ToolRegistry for OpenAI chat completions.

    ``tool_object`` produces the ``tools`` request field and
    ``tool_choice_param`` the matching ``tool_choice`` field.
    """

    @property
    def tool_object(self) -> Optional[List[ChatCompletionToolParam]]:
        """
        The registered tools as OpenAI function tools.

        Returns:
            A list of tool dictionaries, or None if no tools are registered.
        """
        if not self.tools:
            return None

        tools_list: List[ChatCompletionToolParam] = []
        for tool in self.tools.values():
            function_def: Dict[str, Any] = {
                "name": tool.name,
                "description": tool.description,
                # OpenAI expects an object schema even for tools without arguments
                "parameters": tool.parameters or {"type": "object", "properties": {}},
            }
            tools_list.append({"type": "function", "function": function_def})  # type: ignore[typeddict-item]

        return tools_list

    @staticmethod
    def tool_choice_param(tool_choice: Optional[str]) -> Union[str, Dict[str, Any], None]:
        """Translate a tool choice directive into OpenAI's ``tool_choice`` value.

        A tool name forces that tool; ``"any"`` maps to ``"required"``.
        """
        if tool_choice is None:
            return None
        if tool_choice in ("auto", "none", "required"):
            return tool_choice
        if tool_choice == "any":
            return "required"
        return {"type": "function", "function": {"name": tool_choice}}
