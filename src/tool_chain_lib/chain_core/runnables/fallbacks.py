"""Substitute alternate chains when the primary chain fails."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Tuple, Type

from .base import Runnable, coerce_to_runnable
from ..logger import get_logger

logger = get_logger(__name__)


class RunnableWithFallbacks(Runnable):
    """
    Runs a primary step and falls back to alternates on failure.

    The primary runnable is tried first. If it raises an instance of
    ``exceptions_to_handle``, each fallback is tried in order with the same
    input until one succeeds. Exceptions outside ``exceptions_to_handle``
    propagate immediately. If every runnable fails, the primary's error is
    raised.

    With ``exception_key`` set, the input must be a dict and every fallback
    gets a copy of it with the previous runnable's error stored under that
    key. This lets a fallback react to what went wrong, e.g. by showing the
    error to the model.
    """

    def __init__(
        self,
        runnable: Any,
        fallbacks: Sequence[Any],
        exceptions_to_handle: Tuple[Type[BaseException], ...] = (Exception,),
        exception_key: Optional[str] = None,
    ) -> None:
        """Initialize the fallback wrapper.

        Args:
            runnable: The primary step.
            fallbacks: Alternate steps, tried in order.
            exceptions_to_handle: Exception types that trigger a fallback.
            exception_key: Input key under which fallbacks receive the previous error.
        """
        if not fallbacks:
            raise ValueError("At least one fallback is required.")
        self.runnable: Runnable = coerce_to_runnable(runnable)
        self.fallbacks: List[Runnable] = [coerce_to_runnable(f) for f in fallbacks]
        self.exceptions_to_handle = tuple(exceptions_to_handle)
        self.exception_key = exception_key

    @property
    def runnables(self) -> Iterator[Runnable]:
        """The primary runnable followed by the fallbacks."""
        yield self.runnable
        yield from self.fallbacks

    async def ainvoke(self, input: Any) -> Any:
        if self.exception_key is not None and not isinstance(input, dict):
            raise ValueError(
                "If 'exception_key' is specified then input must be a dictionary. "
                f"However found a type of {type(input).__name__} for input."
            )

        first_error: Optional[BaseException] = None
        last_error: Optional[BaseException] = None
        total = len(self.fallbacks) + 1

        for attempt, runnable in enumerate(self.runnables):
            step_input = input
            if self.exception_key is not None and last_error is not None:
                step_input = {**input, self.exception_key: last_error}

            try:
                output = await runnable.ainvoke(step_input)
            except self.exceptions_to_handle as exc:
                if first_error is None:
                    first_error = exc
                last_error = exc
                if attempt + 1 < total:
                    logger.warning(
                        f"'{runnable.get_name()}' failed ({attempt + 1}/{total}): "
                        f"{type(exc).__name__}: {exc}. Trying next fallback."
                    )
                else:
                    logger.error(f"'{runnable.get_name()}' failed ({attempt + 1}/{total}): {type(exc).__name__}: {exc}")
                continue

            if attempt > 0:
                logger.info(f"Fallback {attempt}/{len(self.fallbacks)} '{runnable.get_name()}' succeeded.")
            return output

        if first_error is None:
            raise ValueError("No error stored at end of fallbacks.")
        raise first_error

    def get_name(self) -> str:
        return self.name or f"WithFallbacks({self.runnable.get_name()})"
