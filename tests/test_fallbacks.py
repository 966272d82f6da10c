from typing import Any, List

import pytest

from tool_chain_lib.chain_core import Runnable, RunnableLambda, RunnableWithFallbacks
from tool_chain_lib.chain_core.exceptions import ToolValidationError


class Recorder(Runnable):
    """Fails with ``error`` (if given), otherwise returns ``result``; records its inputs."""

    def __init__(self, name: str, result: Any = None, error: Exception | None = None) -> None:
        self.name = name
        self.result = result
        self.error = error
        self.inputs: List[Any] = []

    async def ainvoke(self, input: Any) -> Any:
        self.inputs.append(input)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_primary_success_skips_fallbacks() -> None:
    primary = Recorder("primary", result="ok")
    fallback = Recorder("fallback", result="fallback")

    result = await primary.with_fallbacks([fallback]).ainvoke("in")

    assert result == "ok"
    assert fallback.inputs == []


@pytest.mark.asyncio
async def test_fallback_runs_with_same_input() -> None:
    primary = Recorder("primary", error=ToolValidationError("dict_arg must be an object"))
    fallback = Recorder("fallback", result=10.5)

    result = await primary.with_fallbacks([fallback]).ainvoke("use complex tool")

    assert result == 10.5
    assert primary.inputs == ["use complex tool"]
    assert fallback.inputs == ["use complex tool"]


@pytest.mark.asyncio
async def test_fallbacks_are_tried_in_order() -> None:
    primary = Recorder("primary", error=ValueError("first"))
    second = Recorder("second", error=ValueError("second"))
    third = Recorder("third", result="third")

    result = await primary.with_fallbacks([second, third]).ainvoke(1)

    assert result == "third"
    assert second.inputs == [1]


@pytest.mark.asyncio
async def test_all_failing_raises_first_error() -> None:
    first_error = ValueError("first")
    chain = Recorder("primary", error=first_error).with_fallbacks(
        [Recorder("fallback", error=ValueError("second"))]
    )

    with pytest.raises(ValueError) as excinfo:
        await chain.ainvoke(1)
    assert excinfo.value is first_error


@pytest.mark.asyncio
async def test_unhandled_exception_propagates_immediately() -> None:
    primary = Recorder("primary", error=KeyError("not handled"))
    fallback = Recorder("fallback", result="unused")
    chain = primary.with_fallbacks([fallback], exceptions_to_handle=(ToolValidationError,))

    with pytest.raises(KeyError):
        await chain.ainvoke(1)
    assert fallback.inputs == []


@pytest.mark.asyncio
async def test_exception_key_passes_previous_error() -> None:
    error = ToolValidationError("bad args")
    primary = Recorder("primary", error=error)
    fallback = Recorder("fallback", result="fixed")
    chain = primary.with_fallbacks([fallback], exception_key="exception")

    result = await chain.ainvoke({"input": "question"})

    assert result == "fixed"
    assert primary.inputs == [{"input": "question"}]
    assert fallback.inputs == [{"input": "question", "exception": error}]


@pytest.mark.asyncio
async def test_exception_key_chains_latest_error() -> None:
    first = ValueError("first")
    second = ValueError("second")
    last = Recorder("last", result="done")
    chain = Recorder("primary", error=first).with_fallbacks(
        [Recorder("middle", error=second), last], exception_key="exception"
    )

    await chain.ainvoke({"input": "q"})
    assert last.inputs == [{"input": "q", "exception": second}]


@pytest.mark.asyncio
async def test_exception_key_requires_dict_input() -> None:
    chain = Recorder("primary", result=1).with_fallbacks([Recorder("fallback")], exception_key="exception")
    with pytest.raises(ValueError, match="must be a dictionary"):
        await chain.ainvoke("not a dict")


def test_fallbacks_require_at_least_one() -> None:
    with pytest.raises(ValueError):
        RunnableWithFallbacks(RunnableLambda(lambda x: x), fallbacks=[])


def test_runnables_lists_primary_then_fallbacks() -> None:
    primary, a, b = Recorder("p"), Recorder("a"), Recorder("b")
    chain = primary.with_fallbacks([a, b])
    assert list(chain.runnables) == [primary, a, b]
