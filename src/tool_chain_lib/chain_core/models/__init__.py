"""Provider-agnostic chat model interface."""

from .base import BaseChatModel

__all__ = ["BaseChatModel"]
