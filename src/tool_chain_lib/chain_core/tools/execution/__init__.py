from .invoker import ToolInvoker
from .tool_runnable import ToolRunnable

__all__ = ["ToolInvoker", "ToolRunnable"]
