"""Expose the OpenAI chat model and tool registry."""

from .core import ChatOpenAI
from .registry import OpenAIToolRegistry

__all__ = ["ChatOpenAI", "OpenAIToolRegistry"]
