"""Core abstraction for chat models used as chain steps."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable, List, Optional, Type, TypeVar

from ..config import ChatModelConfig
from ..exceptions import ConfigurationError, ToolNotFoundError
from ..logger import get_logger
from ..messages import AssistantMessage, BaseMessage, MessageInput, SystemMessage, to_messages
from ..runnables.base import Runnable
from ..tools.registry import ToolRegistry, ToolLike

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound="BaseChatModel")


class BaseChatModel(Runnable, ABC):
    """Abstract base class for provider chat models.

    A model turns a chain input (prompt string, message list or dict, see
    ``to_messages``) into an ``AssistantMessage``. Tools are attached with
    ``bind_tools``, which returns a new model and leaves the original
    untouched, so a primary and a fallback chain can share one client.
    """

    registry_class: ClassVar[Type[ToolRegistry]]

    def __init__(
        self,
        config: ChatModelConfig,
        registry: Optional[ToolRegistry] = None,
        tool_choice: Optional[str] = None,
    ) -> None:
        self.config = config
        self.registry: ToolRegistry = registry if registry is not None else self.registry_class()
        self.tool_choice = tool_choice
        self._validate_tool_choice(self.registry, tool_choice)

    @property
    def model_name(self) -> str:
        return self.config.model_name

    async def ainvoke(self, input: MessageInput) -> AssistantMessage:
        """Send ``input`` to the model and return its reply.

        Provider errors propagate unchanged.
        """
        messages = to_messages(input)
        if self.config.sys_instruction and not any(isinstance(m, SystemMessage) for m in messages):
            messages.insert(0, SystemMessage(content=self.config.sys_instruction))

        logger.debug(
            f"Calling '{self.model_name}' with {len(messages)} message(s), "
            f"{len(self.registry)} tool(s), tool_choice={self.tool_choice!r}."
        )
        reply = await self._agenerate(messages)
        if reply.tool_calls:
            logger.debug(f"'{self.model_name}' requested tool(s): {[c.name for c in reply.tool_calls]}")
        return reply

    def bind_tools(self: ModelT, tools: Iterable[ToolLike], tool_choice: Optional[str] = None) -> ModelT:
        """Return a copy of this model with ``tools`` bound.

        Args:
            tools: Tool definitions or annotated functions.
            tool_choice: ``"auto"``, ``"none"``, ``"any"``/``"required"`` or the name of a
                bound tool the model is forced to call.

        Raises:
            ToolNotFoundError: If ``tool_choice`` names a tool that is not bound.
        """
        registry = self.registry_class(tools)
        self._validate_tool_choice(registry, tool_choice)
        logger.info(
            f"Bound {len(registry)} tool(s) to '{self.model_name}' "
            f"({', '.join(registry.tools)}), tool_choice={tool_choice!r}."
        )
        return self._copy_with(registry=registry, tool_choice=tool_choice)

    def with_config(self: ModelT, **overrides: Any) -> ModelT:
        """Return a copy with changed settings (e.g. ``model_name``), keeping bound tools.

        ``temp`` is accepted as in the constructors.

        Raises:
            ConfigurationError: If an override names no ``ChatModelConfig`` field.
        """
        if "temp" in overrides:
            overrides["temperature"] = overrides.pop("temp")

        unknown = sorted(set(overrides) - set(ChatModelConfig.model_fields))
        if unknown:
            msg = (
                f"Unknown setting(s) {unknown} for '{self.get_name()}'. "
                f"Valid settings: {sorted(ChatModelConfig.model_fields)}."
            )
            logger.error(msg)
            raise ConfigurationError(msg)

        config = ChatModelConfig.model_validate({**self.config.model_dump(), **overrides})
        return self._copy_with(config=config)

    def _copy_with(self: ModelT, **attributes: Any) -> ModelT:
        clone = copy.copy(self)
        for key, value in attributes.items():
            setattr(clone, key, value)
        return clone

    @staticmethod
    def _validate_tool_choice(registry: ToolRegistry, tool_choice: Optional[str]) -> None:
        if tool_choice is None or tool_choice in ("auto", "none"):
            return
        if tool_choice in ("any", "required"):
            if not len(registry):
                raise ToolNotFoundError(f"tool_choice={tool_choice!r} requires at least one bound tool.")
            return
        if tool_choice not in registry:
            msg = f"tool_choice names tool '{tool_choice}', which is not bound. Bound: {list(registry.tools)}"
            logger.error(msg)
            raise ToolNotFoundError(msg, tool_name=tool_choice)

    def get_name(self) -> str:
        return self.name or f"{type(self).__name__}({self.model_name})"

    @abstractmethod
    async def _agenerate(self, messages: List[BaseMessage]) -> AssistantMessage:
        """Run one request against the provider and convert its reply."""
        pass
