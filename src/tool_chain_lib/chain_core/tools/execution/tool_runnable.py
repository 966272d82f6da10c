"""Chain step executing a tool definition."""

from __future__ import annotations

from typing import Any, Optional

from .invoker import ToolInvoker
from ..models import ToolDefinition
from ...exceptions import LLMToolError, ToolNotFoundError
from ...logger import get_logger
from ...messages import AssistantMessage, ToolCall
from ...runnables.base import Runnable

logger = get_logger(__name__)


class ToolRunnable(Runnable):
    """
    Executes a tool as the last step of a chain.

    Accepted inputs are the argument dict itself (e.g. the output of
    ``ToolCallArgsParser``), a single ``ToolCall``, or an ``AssistantMessage``
    whose first call to this tool is executed. When the input carried a tool
    call, any raised ``LLMToolError`` references it through ``tool_call``.

    With ``handle_errors=True`` a failed call returns a description of the
    failure instead of raising, so the chain always produces an output.
    """

    def __init__(
        self,
        tool: ToolDefinition,
        handle_errors: bool = False,
        tool_timeout: float = 180.0,
    ) -> None:
        self.tool = tool
        self.handle_errors = handle_errors
        self.name = tool.name
        self._invoker = ToolInvoker(tool_timeout=tool_timeout)

    async def ainvoke(self, input: Any) -> Any:
        tool_call = self._select_tool_call(input)
        if tool_call is None:
            arguments = input
        elif tool_call.error:
            # Undecodable arguments: normalizing the raw string raises the proper error
            arguments = tool_call.raw_arguments
        else:
            arguments = tool_call.args

        try:
            return await self._invoker.invoke(self.tool, arguments, tool_call=tool_call)
        except LLMToolError as exc:
            if not self.handle_errors:
                raise
            logger.info(f"Tool '{self.tool.name}' failed, returning the error as output.")
            return self.format_error(arguments, exc)

    def _select_tool_call(self, input: Any) -> Optional[ToolCall]:
        if isinstance(input, ToolCall):
            return input
        if isinstance(input, AssistantMessage):
            for call in input.tool_calls:
                if call.name == self.tool.name:
                    return call
            msg = f"Model response contains no call to tool '{self.tool.name}'."
            logger.warning(msg)
            raise ToolNotFoundError(msg, tool_name=self.tool.name)
        return None

    @staticmethod
    def format_error(arguments: Any, error: BaseException) -> str:
        """Describe a failed call the way it is reported back as tool output."""
        return (
            f"Calling tool with arguments:\n\n{arguments}\n\n"
            f"raised the following error:\n\n{type(error)}: {error}"
        )
