from typing import Any, List, Optional

from google import genai
from google.genai import types
from google.genai.client import AsyncClient

from tool_chain_lib.chain_core import (
    AssistantMessage,
    BaseChatModel,
    BaseMessage,
    ChatModelConfig,
    Settings,
    get_logger,
)
from .adapter import from_gemini_response, to_gemini_contents
from .registry import GeminiToolRegistry

logger = get_logger(__name__)


class ChatGemini(BaseChatModel):
    """
    Chat model backed by Google's Gemini API.

    Bound tools are declared as functions and automatic function calling is
    disabled: the model only proposes calls, the chain executes them.
    """

    registry_class = GeminiToolRegistry
    registry: GeminiToolRegistry

    def __init__(
        self,
        aclient: AsyncClient,
        model_name: str,
        temp: float = 0.0,
        max_tokens: int = 3000,
        sys_instruction: Optional[str] = None,
        registry: Optional[GeminiToolRegistry] = None,
        tool_choice: Optional[str] = None,
    ):
        """
        Initializes the Gemini chat model.

        Args:
            aclient: The async Google GenAI client (``genai.Client(...).aio``).
            model_name: The Gemini model identifier (e.g. 'gemini-2.0-flash').
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
        self.client: AsyncClient = aclient
        logger.info(f"Initialized ChatGemini with model='{model_name}', temp={temp}, max_tokens={max_tokens}")

    @classmethod
    def from_env(cls, model_name: str, settings: Optional[Settings] = None, **kwargs: Any) -> "ChatGemini":
        """Create a model with a client configured from ``GOOGLE_API_KEY`` / ``GEMINI_API_KEY``.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        settings = settings or Settings.from_env()
        client = genai.Client(api_key=settings.require_google_key())
        return cls(aclient=client.aio, model_name=model_name, **kwargs)

    def build_config(self, system_instruction: Optional[str]) -> types.GenerateContentConfig:
        """Assemble the request configuration, including tools and tool choice."""
        tools: Optional[List[types.Tool]] = None
        tool_obj = self.registry.tool_object
        if tool_obj:
            tools = [tool_obj]

        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            tools=tools,
            tool_config=self.registry.tool_config(self.tool_choice) if tools else None,
            automatic_function_calling=types.AutomaticFunctionCallingConfig(disable=True),
        )

    async def _agenerate(self, messages: List[BaseMessage]) -> AssistantMessage:
        system_instruction, contents = to_gemini_contents(messages)
        response = await self.client.models.generate_content(
            model=self.config.model_name,
            contents=contents,  # type: ignore[arg-type]
            config=self.build_config(system_instruction),
        )
        return from_gemini_response(response)
