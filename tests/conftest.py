"""Shared fixtures for the SDK tests.

HTTP traffic is served by httpx.MockTransport handlers, so no test touches
the network.
"""

import json
from typing import Callable, Iterable, List

import httpx
import pytest

from llmwise.config import get_settings


class ChunkedStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body delivered in caller-chosen chunks."""

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = list(chunks)

    def __iter__(self):
        yield from self._chunks

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


def sse_body(*events, done: bool = True) -> bytes:
    lines = [f"data: {json.dumps(event, ensure_ascii=False)}\n\n" for event in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from LLMWISE_* variables in the environment."""
    for name in ("LLMWISE_API_KEY", "LLMWISE_BASE_URL", "LLMWISE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sent() -> List[httpx.Request]:
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def mock_transport(sent) -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.MockTransport]:
    def factory(responder):
        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return responder(request)

        return httpx.MockTransport(handler)

    return factory
