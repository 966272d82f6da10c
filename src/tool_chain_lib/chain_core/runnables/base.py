"""Composable async chain steps."""

from __future__ import annotations

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple, Type, Union

from ..logger import get_logger

if TYPE_CHECKING:
    from .fallbacks import RunnableWithFallbacks

logger = get_logger(__name__)


class Runnable(ABC):
    """A single step of a chain.

    Steps are composed with ``|``: ``model | parser | tool`` feeds the output
    of each step into the next one. Plain callables and tool definitions are
    coerced into steps on either side of the operator.
    """

    name: Optional[str] = None

    @abstractmethod
    async def ainvoke(self, input: Any) -> Any:
        """Run the step on a single input."""
        pass

    async def abatch(self, inputs: Sequence[Any]) -> List[Any]:
        """Run the step on several inputs concurrently, preserving order.

        The first failure cancels the calls still running and is raised.
        """
        tasks = [asyncio.ensure_future(self.ainvoke(item)) for item in inputs]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def pipe(self, *others: Any) -> "RunnableSequence":
        """Compose this step with ``others`` into a sequence."""
        return RunnableSequence(self, *others)

    def with_fallbacks(
        self,
        fallbacks: Sequence[Any],
        *,
        exceptions_to_handle: Tuple[Type[BaseException], ...] = (Exception,),
        exception_key: Optional[str] = None,
    ) -> "RunnableWithFallbacks":
        """Wrap this step so that ``fallbacks`` are tried in order when it fails.

        Args:
            fallbacks: Alternate, already-constructed steps to try.
            exceptions_to_handle: Only these exceptions trigger a fallback; others propagate.
            exception_key: If set, each fallback receives the previous error under this key.
                The input must then be a dict.
        """
        from .fallbacks import RunnableWithFallbacks

        return RunnableWithFallbacks(
            runnable=self,
            fallbacks=fallbacks,
            exceptions_to_handle=exceptions_to_handle,
            exception_key=exception_key,
        )

    def __or__(self, other: Any) -> "RunnableSequence":
        return RunnableSequence(self, other)

    def __ror__(self, other: Any) -> "RunnableSequence":
        return RunnableSequence(other, self)

    def get_name(self) -> str:
        return self.name or type(self).__name__


class RunnableLambda(Runnable):
    """Wraps a sync or async function as a chain step."""

    def __init__(self, func: Callable[[Any], Any], name: Optional[str] = None) -> None:
        if not callable(func):
            raise TypeError(f"RunnableLambda expects a callable, got {type(func).__name__}.")
        self.func = func
        self.name = name or getattr(func, "__name__", None)

    async def ainvoke(self, input: Any) -> Any:
        result = self.func(input)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"RunnableLambda({self.get_name()})"


class RunnableSequence(Runnable):
    """Runs its steps in order, feeding each output into the next step."""

    def __init__(self, *steps: Any) -> None:
        flat: List[Runnable] = []
        for step in steps:
            runnable = coerce_to_runnable(step)
            # (a | b) | c -> a | b | c
            if isinstance(runnable, RunnableSequence):
                flat.extend(runnable.steps)
            else:
                flat.append(runnable)
        if len(flat) < 2:
            raise ValueError("A RunnableSequence needs at least two steps.")
        self.steps: List[Runnable] = flat

    @property
    def first(self) -> Runnable:
        return self.steps[0]

    @property
    def last(self) -> Runnable:
        return self.steps[-1]

    async def ainvoke(self, input: Any) -> Any:
        value = input
        for index, step in enumerate(self.steps):
            logger.debug(f"Running step {index + 1}/{len(self.steps)}: {step.get_name()}")
            value = await step.ainvoke(value)
        return value

    def __repr__(self) -> str:
        return " | ".join(step.get_name() for step in self.steps)


RunnableLike = Union[Runnable, Callable[[Any], Any]]


def coerce_to_runnable(thing: Any) -> Runnable:
    """Turn ``thing`` into a Runnable.

    Runnables pass through, tool definitions become tool steps and any
    other callable is wrapped in a RunnableLambda.

    Raises:
        TypeError: If ``thing`` cannot be used as a chain step.
    """
    # Local import: tools import this module for the Runnable base class
    from ..tools.models import ToolDefinition
    from ..tools.execution.tool_runnable import ToolRunnable

    if isinstance(thing, Runnable):
        return thing
    if isinstance(thing, ToolDefinition):
        return ToolRunnable(thing)
    if callable(thing):
        return RunnableLambda(thing)
    raise TypeError(f"Expected a Runnable, callable or ToolDefinition, got {type(thing).__name__}.")
