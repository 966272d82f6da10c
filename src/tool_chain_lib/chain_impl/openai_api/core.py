from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from tool_chain_lib.chain_core import (
    AssistantMessage,
    BaseChatModel,
    BaseMessage,
    ChatModelConfig,
    Settings,
    get_logger,
)
from .adapter import from_openai_response, to_openai_messages
from .registry import OpenAIToolRegistry

logger = get_logger(__name__)


class ChatOpenAI(BaseChatModel):
    """
    Chat model backed by OpenAI chat completions.

    Bound tools are sent as function tools; a forced tool choice is sent as
    ``{"type": "function", "function": {"name": ...}}``.
    """

    registry_class = OpenAIToolRegistry
    registry: OpenAIToolRegistry

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temp: float = 0.0,
        max_tokens: int = 3000,
        sys_instruction: Optional[str] = None,
        registry: Optional[OpenAIToolRegistry] = None,
        tool_choice: Optional[str] = None,
    ):
        """
        Initializes the OpenAI chat model.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The OpenAI model identifier (e.g. 'gpt-3.5-turbo-0125').
            temp: The sampling temperature.
            max_tokens: The maximum number of tokens to generate in the response.
            sys_instruction: Optional system instruction for every request.
            registry: Optional pre-filled tool registry.
            tool_choice: Optional tool choice directive, see ``bind_tools``.
        """
        config = ChatModelConfig(
            model_name=model_name, temperature=temp, max_tokens=max_tokens, sys_instruction=sys_instruction
        )
        super().__init__(config=config, registry=registry, tool_choice=tool_choice)
        self.client: AsyncOpenAI = client
        logger.info(f"Initialized ChatOpenAI with model='{model_name}', temp={temp}, max_tokens={max_tokens}")

    @classmethod
    def from_env(cls, model_name: str, settings: Optional[Settings] = None, **kwargs: Any) -> "ChatOpenAI":
        """Create a model with a client configured from ``OPENAI_API_KEY`` / ``OPENAI_BASE_URL``.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        settings = settings or Settings.from_env()
        client = AsyncOpenAI(api_key=settings.require_openai_key(), base_url=settings.openai_base_url)
        return cls(client=client, model_name=model_name, **kwargs)

    def build_request(self, messages: List[BaseMessage]) -> Dict[str, Any]:
        """Assemble the keyword arguments for ``chat.completions.create``."""
        request: Dict[str, Any] = {
            "model": self.config.model_name,
            "messages": to_openai_messages(messages),
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

        tools = self.registry.tool_object
        if tools:
            request["tools"] = tools
            tool_choice = self.registry.tool_choice_param(self.tool_choice)
            if tool_choice is not None:
                request["tool_choice"] = tool_choice

        return request

    async def _agenerate(self, messages: List[BaseMessage]) -> AssistantMessage:
        request = self.build_request(messages)
        response = await self.client.chat.completions.create(**request)

        if response.choices:
            logger.debug(f"OpenAI finish reason: {response.choices[0].finish_reason}")
        return from_openai_response(response)
