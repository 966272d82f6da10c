from .base import ToolRegistry, ToolLike

__all__ = ["ToolRegistry", "ToolLike"]
