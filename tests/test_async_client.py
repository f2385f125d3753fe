"""Tests for the asynchronous LLMWise client."""

import asyncio
import json

import httpx
import pytest

from conftest import ChunkedStream, sse_body
from llmwise import AsyncLLMWise
from llmwise.exceptions import LLMWiseError
from llmwise.models import BlendResponse, StreamEvent

BASE = "https://gw.example.com/api/v1"
MESSAGES = [{"role": "user", "content": "Hello"}]


class TestAsyncLLMWiseClient:
    """Tests for async LLMWise client."""

    def test_init(self):
        """Test async client initialization."""
        client = AsyncLLMWise(api_key="test-key", base_url="https://gw.example.com")
        assert client.base_url == BASE
        assert client.api_key == "test-key"

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        """Test async client as context manager."""
        async with AsyncLLMWise() as client:
            assert client is not None

    @pytest.mark.asyncio
    async def test_get_json(self, mock_transport, sent):
        transport = mock_transport(lambda request: httpx.Response(200, json={"credits": 42}))
        async with AsyncLLMWise("sk-test", base_url=BASE, transport=transport) as client:
            assert await client.credits_balance() == {"credits": 42}
        assert str(sent[0].url) == f"{BASE}/credits/balance"
        assert sent[0].headers["Authorization"] == "Bearer sk-test"

    @pytest.mark.asyncio
    async def test_query_params(self, mock_transport, sent):
        transport = mock_transport(lambda request: httpx.Response(200, json={"results": []}))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            await client.memory_search("platform", top_k=2)
        params = sent[0].url.params
        assert params["q"] == "platform"
        assert params["top_k"] == "2"
        assert "min_score" not in params

    @pytest.mark.asyncio
    async def test_blend(self, mock_transport, sent):
        payload = {"id": "b-1", "content": "merged", "source_models": ["a", "b"]}
        transport = mock_transport(lambda request: httpx.Response(200, json=payload))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            response = await client.blend(["a", "b"], MESSAGES, strategy="consensus")
        assert isinstance(response, BlendResponse)
        assert response.source_models == ["a", "b"]
        body = json.loads(sent[0].content)
        assert body["stream"] is False
        assert body["strategy"] == "consensus"

    @pytest.mark.asyncio
    async def test_error_response(self, mock_transport):
        transport = mock_transport(lambda request: httpx.Response(500))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            with pytest.raises(LLMWiseError) as exc_info:
                await client.models()
        assert exc_info.value.status == 500
        assert exc_info.value.message == "HTTP 500"

    @pytest.mark.asyncio
    async def test_invalid_json_success_body(self, mock_transport):
        transport = mock_transport(lambda request: httpx.Response(200, text="<html>oops</html>"))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            with pytest.raises(LLMWiseError) as exc_info:
                await client.keys_info()
        assert exc_info.value.message == "Invalid JSON response"

    @pytest.mark.asyncio
    async def test_csv_export(self, mock_transport):
        transport = mock_transport(lambda request: httpx.Response(200, text="a,b\n1,2\n"))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            assert await client.optimization_test_run_csv("r1") == "a,b\n1,2\n"

    @pytest.mark.asyncio
    async def test_concurrent_requests(self, mock_transport, sent):
        """Test concurrent calls on one client are independent."""

        def responder(request):
            return httpx.Response(200, json={"path": request.url.path})

        async with AsyncLLMWise(base_url=BASE, transport=mock_transport(responder)) as client:
            results = await asyncio.gather(client.keys_info(), client.settings_keys(), client.memory())

        assert [r["path"] for r in results] == ["/api/v1/keys/info", "/api/v1/settings/keys", "/api/v1/memory"]
        assert len(sent) == 3

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Test cancelling the awaiting task aborts the request."""
        started = asyncio.Event()

        async def handler(request):
            started.set()
            await asyncio.sleep(10)
            return httpx.Response(200, json={})

        async with AsyncLLMWise(base_url=BASE, transport=httpx.MockTransport(handler)) as client:
            task = asyncio.ensure_future(client.usage_summary(days=1))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task


class TestAsyncStreaming:
    """Tests for async *_stream methods."""

    @pytest.mark.asyncio
    async def test_chat_stream(self, mock_transport, sent):
        body = sse_body({"delta": "Bon"}, {"delta": "jour ☀"}, {"done": True, "credits_charged": 2})
        chunks = [body[i:i + 5] for i in range(0, len(body), 5)]
        transport = mock_transport(lambda request: httpx.Response(200, stream=ChunkedStream(chunks)))

        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            events = [event async for event in client.chat_stream("auto", MESSAGES)]

        assert all(isinstance(event, StreamEvent) for event in events)
        assert "".join(event.delta or "" for event in events) == "Bonjour ☀"
        assert events[-1].credits_charged == 2
        assert sent[0].headers["Accept"] == "text/event-stream"
        assert json.loads(sent[0].content)["stream"] is True

    @pytest.mark.asyncio
    async def test_compare_stream_without_done(self, mock_transport):
        body = sse_body({"model": "a", "delta": "x"}, {"event": "summary", "fastest": "a"}, done=False)
        transport = mock_transport(lambda request: httpx.Response(200, stream=ChunkedStream([body])))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            events = [event async for event in client.compare_stream(["a", "b"], MESSAGES)]
        assert [event.model for event in events] == ["a", None]
        assert events[-1].fastest == "a"

    @pytest.mark.asyncio
    async def test_stream_error_status(self, mock_transport):
        transport = mock_transport(
            lambda request: httpx.Response(401, stream=ChunkedStream([b'{"error": "invalid api key"}']))
        )
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            with pytest.raises(LLMWiseError) as exc_info:
                async for _ in client.judge_stream(["a", "b"], "c", MESSAGES):
                    pass
        assert exc_info.value.status == 401
        assert exc_info.value.message == "invalid api key"

    @pytest.mark.asyncio
    async def test_early_exit_closes_stream(self, mock_transport):
        body = sse_body({"delta": "1"}, {"delta": "2"}, {"delta": "3"})
        transport = mock_transport(lambda request: httpx.Response(200, stream=ChunkedStream([body])))
        async with AsyncLLMWise(base_url=BASE, transport=transport) as client:
            stream = client.blend_stream(["a"], MESSAGES)
            first = await stream.__anext__()
            await stream.aclose()
        assert first.delta == "1"
