"""
Tool calling with error handling and model fallbacks.

A cheap model is forced to call ``complex_tool``. Models sometimes send
arguments that don't match the tool's schema (e.g. ``dict_arg="potato"``),
which makes the chain raise. Three ways of dealing with that are shown:

1. try/except: the tool returns the error as its output;
2. fallback: the same chain is re-run on a stronger model;
3. retry with exception: the failed call and its error are shown to the model.

Requires OPENAI_API_KEY in the environment (or a .env file).
"""

import asyncio
import logging
from typing import Annotated

from pydantic import Field

from tool_chain_lib import ChatOpenAI, ToolCallArgsParser, ToolRunnable, self_correcting, tool
from tool_chain_lib.chain_core import setup_logging

PROMPT = "use complex tool. the args are 5, 2.1, potato"


@tool
def complex_tool(
    int_arg: Annotated[int, Field(description="An integer")],
    float_arg: Annotated[float, Field(description="A float")],
    dict_arg: Annotated[dict, Field(description="A dictionary")],
) -> float:
    """Do something complex with a complex tool."""
    return int_arg * float_arg


async def main() -> None:
    setup_logging(logging.INFO)

    llm = ChatOpenAI.from_env(model_name="gpt-3.5-turbo-0125", temp=0)
    llm_with_tools = llm.bind_tools([complex_tool], tool_choice="complex_tool")
    better_model = llm.with_config(model_name="gpt-4-1106-preview").bind_tools(
        [complex_tool], tool_choice="complex_tool"
    )

    parser = ToolCallArgsParser(key_name="complex_tool", first_tool_only=True)

    # 1. try/except tool call
    safe_chain = llm_with_tools | parser | ToolRunnable(complex_tool, handle_errors=True)
    print("try/except:", await safe_chain.ainvoke(PROMPT))

    # 2. fallback to a better model
    chain = llm_with_tools | parser | complex_tool
    better_chain = better_model | parser | complex_tool
    chain_with_fallback = chain.with_fallbacks([better_chain])
    print("fallback:", await chain_with_fallback.ainvoke(PROMPT))

    # 3. retry with exception: the tool step receives the model message, so errors carry the tool call
    primary = llm_with_tools | ToolRunnable(complex_tool)
    self_correcting_chain = primary.with_fallbacks(
        [self_correcting(llm_with_tools, complex_tool)], exception_key="exception"
    )
    print("retry with exception:", await self_correcting_chain.ainvoke({"input": PROMPT}))


if __name__ == "__main__":
    asyncio.run(main())
