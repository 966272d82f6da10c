"""Tool definition model."""

from typing import Any, Callable, Optional, Type

from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be bound to a chat model.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The callable Python function that implements the tool's logic.
        parameters: JSON schema of the tool's arguments, as sent to the provider.
        args_model: Optional Pydantic model used for validating and coercing arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)
