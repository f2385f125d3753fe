"""LLMWise SDK client implementations."""

import json
import logging
from typing import Any, AsyncIterator, Dict, Iterator, Mapping, NoReturn, Optional, Sequence

import httpx
from pydantic import ValidationError

from llmwise._utils import auth_headers, build_query, normalize_api_base, normalize_path
from llmwise.config import get_settings
from llmwise.exceptions import LLMWiseError
from llmwise.models import BlendRequest, ChatRequest, CompareRequest, JudgeRequest, StreamEvent
from llmwise.resources import MessageInput, _Endpoints, completion_body
from llmwise.sse import astream_sse_json, stream_sse_json

logger = logging.getLogger(__name__)


def _to_stream_event(data: Any) -> Optional[StreamEvent]:
    if not isinstance(data, dict):
        logger.debug(f"Dropping non-object stream event: {data!r}")
        return None
    try:
        return StreamEvent.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Stream event failed validation, passing through unvalidated: {e}")
        return StreamEvent.model_construct(**data)


class _BaseClient(_Endpoints):
    """Configuration and request building shared by both clients."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.api_key
        self._base_url = normalize_api_base(base_url if base_url is not None else settings.base_url)
        self._timeout = timeout if timeout is not None else settings.timeout
        self._custom_headers = dict(headers or {})

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._custom_headers)

    def _url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        return f"{self._base_url}{build_query(normalize_path(path), params)}"

    def _build_headers(self, json_body: bool = False, stream: bool = False) -> Dict[str, str]:
        """Build request headers."""
        headers: Dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if stream:
            headers["Accept"] = "text/event-stream"
        headers.update(auth_headers(self._api_key))
        headers.update(self._custom_headers)
        return headers

    def _handle_error(self, response: httpx.Response) -> NoReturn:
        """Raise LLMWiseError for a failed (already read) response."""
        text = response.text
        status = response.status_code
        message = text or f"HTTP {status}"
        payload: Any = text or None

        try:
            payload = json.loads(text)
        except ValueError:
            pass
        else:
            if isinstance(payload, dict) and payload.get("error"):
                message = str(payload["error"])

        logger.debug(f"Request failed with HTTP {status}: {message}")
        raise LLMWiseError(message, status=status, payload=payload)

    def _decode(self, response: httpx.Response, cast_to: Optional[type], raw_text: bool) -> Any:
        if raw_text:
            return response.text
        try:
            data = response.json()
        except ValueError:
            raise LLMWiseError(
                "Invalid JSON response",
                status=response.status_code,
                payload=response.text or None,
            )
        if cast_to is None:
            return data
        try:
            return cast_to.model_validate(data)
        except ValidationError as e:
            if not isinstance(data, dict):
                raise LLMWiseError(
                    f"Unexpected response shape for {cast_to.__name__}",
                    status=response.status_code,
                    payload=data,
                )
            logger.debug(f"{cast_to.__name__} failed validation, passing through unvalidated: {e}")
            return cast_to.model_construct(**data)


class LLMWise(_BaseClient):
    """Synchronous LLMWise client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the LLMWise client.

        Args:
            api_key: API key sent as a bearer token (default: LLMWISE_API_KEY)
            base_url: Gateway URL; "/api/v1" is appended when missing
                (default: LLMWISE_BASE_URL, then https://llmwise.ai/api/v1)
            timeout: Request timeout in seconds (default: no timeout)
            headers: Additional headers to include in every request
            transport: Custom httpx transport, e.g. httpx.MockTransport
            http_client: Preconfigured httpx.Client; left open on close()
        """
        super().__init__(api_key, base_url, timeout, headers)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=self._timeout,
            transport=transport,
            follow_redirects=True,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        """Close the client."""
        if self._owns_client:
            self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        cast_to: Optional[type] = None,
        raw_text: bool = False,
    ) -> Any:
        url = self._url(path, params)
        logger.debug(f"{method} {url}")
        response = self._client.request(
            method,
            url,
            headers=self._build_headers(json_body=body is not None),
            json=body,
        )
        if not response.is_success:
            self._handle_error(response)
        return self._decode(response, cast_to, raw_text)

    def _stream(self, path: str, body: Dict[str, Any]) -> Iterator[StreamEvent]:
        """Execute a streaming request."""
        url = self._url(path)
        logger.debug(f"POST {url} (stream)")
        with self._client.stream(
            "POST",
            url,
            headers=self._build_headers(json_body=True, stream=True),
            json=body,
        ) as response:
            for data in stream_sse_json(response):
                event = _to_stream_event(data)
                if event is not None:
                    yield event

    def chat_stream(self, model: str, messages: Sequence[MessageInput], **options: Any) -> Iterator[StreamEvent]:
        """
        Stream a chat completion.

        Args:
            model: Model id, or "auto"
            messages: Conversation messages
            **options: Other ChatRequest fields

        Yields:
            StreamEvent for each server-sent event, until [DONE]
        """
        body = completion_body(ChatRequest, dict(options, model=model, messages=messages), stream=True)
        return self._stream("/chat", body)

    def compare_stream(
        self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any
    ) -> Iterator[StreamEvent]:
        body = completion_body(CompareRequest, dict(options, models=models, messages=messages), stream=True)
        return self._stream("/compare", body)

    def blend_stream(
        self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any
    ) -> Iterator[StreamEvent]:
        body = completion_body(BlendRequest, dict(options, models=models, messages=messages), stream=True)
        return self._stream("/blend", body)

    def judge_stream(
        self,
        contestants: Sequence[str],
        judge: str,
        messages: Sequence[MessageInput],
        **options: Any,
    ) -> Iterator[StreamEvent]:
        fields = dict(options, contestants=contestants, judge=judge, messages=messages)
        return self._stream("/judge", completion_body(JudgeRequest, fields, stream=True))


class AsyncLLMWise(_BaseClient):
    """Asynchronous LLMWise client.

    Endpoint methods return coroutines; ``*_stream`` methods return async
    iterators. Cancelling the awaiting task aborts the underlying request.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the async LLMWise client.

        Args:
            api_key: API key sent as a bearer token
            base_url: Gateway URL
            timeout: Request timeout in seconds (default: no timeout)
            headers: Additional headers to include in every request
            transport: Custom async httpx transport
            http_client: Preconfigured httpx.AsyncClient; left open on close()
        """
        super().__init__(api_key, base_url, timeout, headers)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._timeout,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self) -> None:
        """Close the client."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        cast_to: Optional[type] = None,
        raw_text: bool = False,
    ) -> Any:
        url = self._url(path, params)
        logger.debug(f"{method} {url}")
        response = await self._client.request(
            method,
            url,
            headers=self._build_headers(json_body=body is not None),
            json=body,
        )
        if not response.is_success:
            self._handle_error(response)
        return self._decode(response, cast_to, raw_text)

    async def _stream(self, path: str, body: Dict[str, Any]) -> AsyncIterator[StreamEvent]:
        """Execute a streaming request."""
        url = self._url(path)
        logger.debug(f"POST {url} (stream)")
        async with self._client.stream(
            "POST",
            url,
            headers=self._build_headers(json_body=True, stream=True),
            json=body,
        ) as response:
            events = await astream_sse_json(response)
            async for data in events:
                event = _to_stream_event(data)
                if event is not None:
                    yield event

    def chat_stream(
        self, model: str, messages: Sequence[MessageInput], **options: Any
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream a chat completion.

        Usage:
            async for event in client.chat_stream("auto", messages):
                print(event.delta or "", end="")
        """
        body = completion_body(ChatRequest, dict(options, model=model, messages=messages), stream=True)
        return self._stream("/chat", body)

    def compare_stream(
        self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any
    ) -> AsyncIterator[StreamEvent]:
        body = completion_body(CompareRequest, dict(options, models=models, messages=messages), stream=True)
        return self._stream("/compare", body)

    def blend_stream(
        self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any
    ) -> AsyncIterator[StreamEvent]:
        body = completion_body(BlendRequest, dict(options, models=models, messages=messages), stream=True)
        return self._stream("/blend", body)

    def judge_stream(
        self,
        contestants: Sequence[str],
        judge: str,
        messages: Sequence[MessageInput],
        **options: Any,
    ) -> AsyncIterator[StreamEvent]:
        fields = dict(options, contestants=contestants, judge=judge, messages=messages)
        return self._stream("/judge", completion_body(JudgeRequest, fields, stream=True))
