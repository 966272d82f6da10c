"""Chain composition primitives: steps, sequences and fallbacks."""

from .base import Runnable, RunnableLambda, RunnableSequence, RunnableLike, coerce_to_runnable
from .fallbacks import RunnableWithFallbacks

__all__ = [
    "Runnable",
    "RunnableLambda",
    "RunnableSequence",
    "RunnableLike",
    "RunnableWithFallbacks",
    "coerce_to_runnable",
]
