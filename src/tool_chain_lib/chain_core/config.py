"""Model settings and environment-based credentials."""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)


class ChatModelConfig(BaseModel):
    """
    Per-model request settings.

    Attributes:
        model_name: Provider model identifier (e.g. 'gpt-3.5-turbo-0125').
        temperature: Sampling temperature.
        max_tokens: Maximum number of tokens to generate.
        sys_instruction: Optional system instruction prepended to every request.
    """

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    model_name: str
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_tokens: int = Field(default=3000, gt=0)
    sys_instruction: Optional[str] = None


class Settings(BaseModel):
    """Credentials and endpoints read from the environment."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    google_api_key: Optional[str] = None

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Args:
            load_env_file: Load a ``.env`` file (searched upwards from the working directory) first.
                Variables already set in the environment take precedence.
        """
        if load_env_file:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug(f"Loading environment from {env_file}")
                load_dotenv(env_file)

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL"),
            google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
        )

    def require_openai_key(self) -> str:
        """Return the OpenAI key or raise ConfigurationError."""
        if not self.openai_api_key:
            msg = "OPENAI_API_KEY not found in environment variables."
            logger.error(msg)
            raise ConfigurationError(msg)
        return self.openai_api_key

    def require_google_key(self) -> str:
        """Return the Gemini key or raise ConfigurationError."""
        if not self.google_api_key:
            msg = "GOOGLE_API_KEY (or GEMINI_API_KEY) not found in environment variables."
            logger.error(msg)
            raise ConfigurationError(msg)
        return self.google_api_key
