"""Extract tool-call arguments from a model response."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from ..exceptions import OutputParserError
from ..logger import get_logger
from ..messages import AssistantMessage, ToolCall
from ..runnables.base import Runnable

logger = get_logger(__name__)


class ToolCallArgsParser(Runnable):
    """
    Turns an ``AssistantMessage`` into the arguments of its tool calls.

    Args:
        key_name: Only keep calls to this tool.
        first_tool_only: Return the first matching call instead of a list.
            ``None`` is returned when nothing matches.
        return_id: Return ``{"name", "args", "id"}`` records instead of bare arguments.
        args_model: Optional Pydantic model the arguments must satisfy.

    Raises:
        OutputParserError: If a call's raw arguments could not be decoded, or
            fail ``args_model`` validation. ``llm_output`` holds the raw output.
    """

    def __init__(
        self,
        key_name: Optional[str] = None,
        first_tool_only: bool = False,
        return_id: bool = False,
        args_model: Optional[Type[BaseModel]] = None,
    ) -> None:
        self.key_name = key_name
        self.first_tool_only = first_tool_only
        self.return_id = return_id
        self.args_model = args_model

    async def ainvoke(self, input: Any) -> Any:
        return self.parse(input)

    def parse(self, message: AssistantMessage) -> Any:
        if not isinstance(message, AssistantMessage):
            raise OutputParserError(
                f"Expected an AssistantMessage, got {type(message).__name__}.", llm_output=message
            )

        calls = [c for c in message.tool_calls if self.key_name is None or c.name == self.key_name]
        if self.first_tool_only:
            calls = calls[:1]

        parsed = [self._parse_call(call, message) for call in calls]

        if self.first_tool_only:
            if not parsed:
                logger.debug(f"No tool call matching '{self.key_name}' in model output.")
                return None
            return parsed[0]
        return parsed

    def _parse_call(self, call: ToolCall, message: AssistantMessage) -> Any:
        if call.error:
            msg = (
                f"Function {call.name} arguments:\n\n{call.raw_arguments}\n\n"
                f"are not valid JSON. Received error: {call.error}"
            )
            logger.warning(msg)
            raise OutputParserError(msg, llm_output=self._raw_output(call, message))

        args: Any = call.args
        if self.args_model is not None:
            try:
                args = self.args_model.model_validate(call.args)
            except ValidationError as exc:
                msg = f"Arguments of '{call.name}' failed validation: {exc}"
                logger.warning(msg)
                raise OutputParserError(msg, llm_output=self._raw_output(call, message)) from exc

        if self.return_id:
            record: Dict[str, Any] = {"name": call.name, "args": args, "id": call.id}
            return record
        return args

    @staticmethod
    def _raw_output(call: ToolCall, message: AssistantMessage) -> Any:
        return call.raw_arguments if call.raw_arguments is not None else message.content
