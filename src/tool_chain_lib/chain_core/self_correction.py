"""Fallbacks that show the failed tool call and its error to the model."""

from functools import partial
from typing import Any, Dict, List

from .logger import get_logger
from .messages import AssistantMessage, BaseMessage, ToolCall, ToolMessage, UserMessage
from .models import BaseChatModel
from .runnables import RunnableLambda, RunnableSequence
from .tools.execution import ToolRunnable
from .tools.models import ToolDefinition

logger = get_logger(__name__)

CORRECTION_PROMPT = (
    "The last tool call raised an exception. Try calling the tool again with corrected arguments. "
    "Do not repeat mistakes."
)


def exception_to_messages(inputs: Dict[str, Any], exception_key: str = "exception") -> Dict[str, Any]:
    """Replace the error under ``exception_key`` with follow-up messages.

    The failed call is replayed as an assistant turn, its error as the tool's
    output, followed by a request to try again. Errors that don't carry a
    tool call are reported in a single user message.

    Raises:
        KeyError: If ``inputs`` holds no error under ``exception_key``.
    """
    exception = inputs[exception_key]
    tool_call = getattr(exception, "tool_call", None)

    follow_up: List[BaseMessage] = list(inputs.get("messages") or [])
    if isinstance(tool_call, ToolCall):
        follow_up.extend(
            [
                AssistantMessage(content="", tool_calls=[tool_call]),
                ToolMessage(tool_call_id=tool_call.id, name=tool_call.name, content=str(exception)),
                UserMessage(content=CORRECTION_PROMPT),
            ]
        )
    else:
        follow_up.append(
            UserMessage(
                content=f"The last attempt failed with {type(exception).__name__}: {exception}\n\n{CORRECTION_PROMPT}"
            )
        )

    logger.debug(f"Replaying {type(exception).__name__} to the model as {len(follow_up)} message(s).")
    new_inputs = {key: value for key, value in inputs.items() if key != exception_key}
    new_inputs["messages"] = follow_up
    return new_inputs


def self_correcting(model: BaseChatModel, tool: ToolDefinition, exception_key: str = "exception") -> RunnableSequence:
    """Build ``exception_to_messages | model | tool`` for use with ``with_fallbacks(..., exception_key=...)``.

    ``model`` should already have ``tool`` bound, usually with a forced tool choice.
    """
    replay = RunnableLambda(partial(exception_to_messages, exception_key=exception_key), name="exception_to_messages")
    return RunnableSequence(replay, model, ToolRunnable(tool))
