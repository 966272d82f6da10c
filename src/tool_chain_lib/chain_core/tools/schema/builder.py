"""Derive tool definitions from annotated Python functions."""

import inspect
from typing import Annotated, Any, Callable, Dict, Optional, Tuple, cast, get_args, get_origin

from pydantic import Field, create_model
from pydantic.fields import FieldInfo

from ..models import ToolDefinition
from .json_schema import parameters_schema
from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


def build_tool_definition(
    func: Callable, name: Optional[str] = None, description: Optional[str] = None
) -> ToolDefinition:
    """Generate a ToolDefinition from a callable function.

    Every parameter must be annotated as ``Annotated[T, Field(description=...)]``.
    The parameters become a pydantic argument model, which is both the
    validator for incoming arguments and the source of the JSON schema.

    Args:
        func: The function to generate a definition for.
        name: Optional name override for the tool.
        description: Optional description override for the tool.

    Returns:
        A ToolDefinition object containing the tool's metadata, schema and argument model.

    Raises:
        ToolValidationError: If the function is missing a docstring or parameter descriptions,
            takes ``*args``/``**kwargs``, or if its argument schema is recursive.
    """
    tool_name = name or func.__name__
    if description is None:
        description = _get_docstring_from_func(func, tool_name)

    fields = _build_fields(inspect.signature(func), tool_name)

    # create_model expects **field_definitions: Any
    args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))

    return ToolDefinition(
        name=tool_name,
        description=description,
        func=func,
        parameters=parameters_schema(args_model, tool_name),
        args_model=args_model,
    )


def tool(func: Callable) -> ToolDefinition:
    """Decorator turning an annotated function into a ToolDefinition.

    The decorated name keeps working as a function: calling the definition
    calls the wrapped function.
    """
    return build_tool_definition(func)


def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
    doc = inspect.getdoc(func)
    if not doc:
        msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
        logger.error(msg)
        raise ToolValidationError(msg, tool_name=tool_name)
    return doc


def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Tuple[Any, FieldInfo]]:
    fields: Dict[str, Tuple[Any, FieldInfo]] = {}
    for param_name, param in signature.parameters.items():
        if param_name in ("self", "cls"):
            continue

        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            msg = f"Tool '{tool_name}' cannot take variadic parameter '{param_name}'; declare each argument."
            logger.error(msg)
            raise ToolValidationError(msg, tool_name=tool_name)

        default = param.default if param.default is not inspect.Parameter.empty else ...
        description = _parameter_description(param_name, param.annotation, tool_name)
        fields[param_name] = (param.annotation, Field(default=default, description=description))
    return fields


def _parameter_description(param_name: str, annotation: Any, tool_name: str) -> str:
    if get_origin(annotation) is Annotated:
        for metadata in get_args(annotation)[1:]:
            if isinstance(metadata, FieldInfo) and metadata.description:
                return metadata.description

    msg = (
        f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
        f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
    )
    logger.error(msg)
    raise ToolValidationError(msg, tool_name=tool_name)
