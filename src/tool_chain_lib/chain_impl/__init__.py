"""Concrete chat model providers and their provider-specific tool registries."""

from .gemini import ChatGemini, GeminiToolRegistry
from .openai_api import ChatOpenAI, OpenAIToolRegistry

__all__ = [
    "ChatGemini",
    "GeminiToolRegistry",
    "ChatOpenAI",
    "OpenAIToolRegistry",
]
