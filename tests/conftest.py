import os
from typing import Annotated, Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv, find_dotenv
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion
from pydantic import Field

from tool_chain_lib import tool

env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


@tool
def complex_tool(
    int_arg: Annotated[int, Field(description="An integer")],
    float_arg: Annotated[float, Field(description="A float")],
    dict_arg: Annotated[dict, Field(description="A dictionary")],
) -> float:
    """Do something complex with a complex tool."""
    return int_arg * float_arg


def make_completion(
    content: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    model: str = "gpt-3.5-turbo-0125",
) -> ChatCompletion:
    """Build a real ChatCompletion. ``tool_calls`` items are ``{"id", "name", "arguments"}``."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = [
            {
                "id": call["id"],
                "type": "function",
                "function": {"name": call["name"], "arguments": call["arguments"]},
            }
            for call in tool_calls
        ]
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "tool_calls" if tool_calls else "stop",
                    "message": message,
                }
            ],
        }
    )


@pytest.fixture
def complex_tool_def():
    return complex_tool


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def mock_gemini_client() -> Any:
    aclient = MagicMock()
    aclient.models = MagicMock()
    aclient.models.generate_content = AsyncMock()
    return aclient


@pytest.fixture
def openai_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY") or "dummy_key"
    return AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "openai-organization",
            "x-goog-api-key",
            "x-api-key",
            "api-key",
        ],
        "filter_query_parameters": ["key", "api_key", "access_token"],
        "decode_compressed_response": True,
    }
