# tests/conftest.py

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from infrastructure.backoff import BackoffPolicy, ExponentialBackoff
from infrastructure.config import OpenAIConfig
from infrastructure.openai_client import OpenAIClient


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def chat_chunk(content: Optional[str], *, index: int = 0, choices: bool = True) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-test",
        "choices": (
            [{"index": index, "delta": {"content": content}, "finish_reason": None}]
            if choices
            else []
        ),
    }


def sse_body(*events: Any, done: bool = True) -> bytes:
    lines = []
    for event in events:
        payload = event if isinstance(event, str) else json.dumps(event)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fast_backoff(sleep_recorder) -> ExponentialBackoff:
    policy = BackoffPolicy(
        max_attempts=3,
        max_elapsed=60.0,
        initial_interval=0.01,
        max_interval=0.02,
        jitter=0.0,
        retry_after_cap=5.0,
    )
    return ExponentialBackoff(policy, sleep=sleep_recorder)


@pytest.fixture
def openai_config() -> OpenAIConfig:
    return OpenAIConfig(api_key="sk-test", api_base="https://api.test/v1")


@pytest.fixture
def make_client(openai_config, fast_backoff) -> Callable[..., OpenAIClient]:
    def factory(handler, *, config=None, backoff=None) -> OpenAIClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OpenAIClient(
            config or openai_config,
            http_client=http_client,
            backoff=backoff or fast_backoff,
        )

    return factory


def sse_response(*events: Any, done: bool = True) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"Content-Type": "text/event-stream"},
        content=sse_body(*events, done=done),
    )
