"""Tool registry abstraction."""

from abc import abstractmethod, ABC
from typing import Callable, Dict, Any, Iterable, Union, Optional

from ..models import ToolDefinition
from ..schema import build_tool_definition
from ...exceptions import ToolNotFoundError, ToolRegistrationError
from ...logger import get_logger

logger = get_logger(__name__)

ToolLike = Union[ToolDefinition, Callable]


class ToolRegistry(ABC):
    """
    A collection of tools bound to a chat model.

    This class holds the function declarations sent to the provider and
    maps function names to their Python implementations. Subclasses render
    the declarations in their provider's wire format via ``tool_object``.
    """

    def __init__(self, tools: Optional[Iterable[ToolLike]] = None) -> None:
        """Initialize the registry, optionally registering ``tools`` right away."""
        self.tools: Dict[str, ToolDefinition] = {}
        for item in tools or []:
            self.register(item)

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Any] = None,
    ) -> None:
        """
        Register a new tool.

        A tool can be given as a ``ToolDefinition``, as a plain function (the
        definition is derived from its signature and docstring), or as its
        individual components.

        Args:
            name_or_tool: Either a `ToolDefinition` object, the name of the tool (str), or a Callable.
            description: What the tool does. Required if `name_or_tool` is a string and parameters are provided.
            func: The callable implementing the tool. Required if `name_or_tool` is a string.
            parameters: JSON schema of the tool's input. If None, it is inferred from `func`.

        Raises:
            ToolRegistrationError: If individual arguments are incomplete or if the tool already exists.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = build_tool_definition(name_or_tool, description=description)
        else:
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.", tool_name=name_or_tool)

            if parameters is None:
                tool = build_tool_definition(func, name=name_or_tool, description=description)
            else:
                if description is None:
                    raise ToolRegistrationError(
                        "If passing name and parameters, description is required.", tool_name=name_or_tool
                    )
                tool = ToolDefinition(name=name_or_tool, description=description, func=func, parameters=parameters)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg, tool_name=tool.name)

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")

    def unregister(self, tool_name: str) -> None:
        """Remove a tool from the registry.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.", tool_name=tool_name)
        del self.tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def get(self, tool_name: str) -> ToolDefinition:
        """Return the definition registered under ``tool_name``.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.", tool_name=tool_name) from None

    def tool(self, func: Callable) -> ToolDefinition:
        """A decorator registering a function as a tool.

        Returns:
            The generated ToolDefinition, which is still callable like the function.
        """
        definition = build_tool_definition(func)
        self.register(definition)
        return definition

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """The registered tools in the provider's request format, or None if empty."""
        pass

    @property
    def implementations(self) -> Dict[str, Callable]:
        """Mapping of tool names to their callables."""
        return {name: tool.func for name, tool in self.tools.items()}

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    def __len__(self) -> int:
        return len(self.tools)
