"""Gemini chat model implementation."""

from .core import ChatGemini
from .registry import GeminiToolRegistry

__all__ = ["ChatGemini", "GeminiToolRegistry"]
