"""Argument normalization, validation and execution of a single tool."""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError

from ..models import ToolDefinition
from ...exceptions import ToolExecutionError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolInvoker:
    """Runs tool definitions with validated arguments.

    Arguments are normalized (dict, JSON string or None), validated and
    coerced through the tool's ``args_model``, and the function is executed
    with a timeout. Sync functions run in a worker thread.
    """

    def __init__(self, tool_timeout: float = 180.0) -> None:
        """Initialize the invoker.

        Args:
            tool_timeout: Timeout in seconds for a single tool execution.
        """
        self._tool_timeout = tool_timeout

    async def invoke(self, tool: ToolDefinition, arguments: Any, tool_call: Optional[Any] = None) -> Any:
        """Validate ``arguments`` against ``tool`` and execute it.

        Args:
            tool: The tool to execute.
            arguments: Raw arguments (dict, JSON string, pydantic model, or None).
            tool_call: The model's tool call the arguments came from, attached to raised errors.

        Returns:
            Whatever the tool function returns.

        Raises:
            ToolValidationError: If the arguments cannot be decoded or violate the tool's schema.
            ToolExecutionError: If the tool raises or times out.
        """
        function_args = self._normalize_function_args(tool.name, arguments, tool_call)

        if tool.args_model:
            try:
                validated_args = tool.args_model(**function_args)
            except ValidationError as validation_error:
                msg = f"Argument validation failed for tool '{tool.name}': {validation_error}"
                logger.warning(msg)
                raise ToolValidationError(
                    msg, tool_name=tool.name, arguments=arguments, tool_call=tool_call
                ) from validation_error
            # Keep nested models as objects; model_dump() would flatten them to dicts
            function_args = {field: getattr(validated_args, field) for field in type(validated_args).model_fields}

        logger.info(f"Executing tool '{tool.name}'...")
        try:
            result = await self._execute_tool(tool.func, function_args)
        except ToolExecutionError as exc:
            exc.tool_name = tool.name
            exc.arguments = arguments
            exc.tool_call = tool_call
            raise
        except Exception as exc:
            msg = f"Error executing '{tool.name}': {exc}"
            logger.warning(f"{msg} ({type(exc).__name__})")
            raise ToolExecutionError(msg, tool_name=tool.name, arguments=arguments, tool_call=tool_call) from exc

        logger.info(f"Tool '{tool.name}' executed successfully.")
        return result

    @staticmethod
    def _normalize_function_args(tool_name: str, raw_args: Any, tool_call: Optional[Any] = None) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Raises:
            ToolValidationError: If arguments cannot be parsed into an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                msg = f"Failed to parse arguments for tool '{tool_name}': {exc}"
                raise ToolValidationError(msg, tool_name=tool_name, arguments=raw_args, tool_call=tool_call) from exc

            if parsed is None:
                return {}

            if not isinstance(parsed, dict):
                msg = f"Failed to parse arguments for tool '{tool_name}': arguments must decode to a JSON object."
                raise ToolValidationError(msg, tool_name=tool_name, arguments=raw_args, tool_call=tool_call)

            return parsed

        if isinstance(raw_args, Mapping):
            return dict(raw_args)

        if isinstance(raw_args, BaseModel):
            # e.g. ToolCallArgsParser(args_model=...) output
            return {field: getattr(raw_args, field) for field in type(raw_args).model_fields}

        msg = (
            f"Failed to parse arguments for tool '{tool_name}': arguments must be an object, "
            f"got {type(raw_args).__name__}. Use first_tool_only=True when parsing a single call."
        )
        raise ToolValidationError(msg, tool_name=tool_name, arguments=raw_args, tool_call=tool_call)

    async def _execute_tool(self, tool_function: Any, function_args: Dict[str, Any]) -> Any:
        """Execute the tool function, handling async/sync and timeouts.

        Raises:
            ToolExecutionError: If execution times out.
        """
        try:
            if inspect.iscoroutinefunction(tool_function):
                return await asyncio.wait_for(tool_function(**function_args), timeout=self._tool_timeout)

            return await asyncio.wait_for(
                asyncio.to_thread(tool_function, **function_args),
                timeout=self._tool_timeout,
            )

        except asyncio.TimeoutError as exc:
            msg = f"Tool execution timed out after {self._tool_timeout} seconds."
            raise ToolExecutionError(msg) from exc
