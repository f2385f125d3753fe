"""Server-Sent Events decoding for streaming endpoints.

The gateway streams ``data: <json>`` lines and ends with ``data: [DONE]``.
Frames whose payload is not valid JSON are dropped; only the checks made
before decoding starts can raise.
"""

import codecs
import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Iterable, Iterator, List, Tuple

import httpx

from llmwise.exceptions import LLMWiseError

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
NO_BODY_STATUS = 502

_SKIP = "skip"
_DONE = "done"
_EVENT = "event"


class SSELineDecoder:
    """Incremental bytes-to-lines decoder.

    Holds the pending UTF-8 decode state and the text of the line that has
    not been terminated yet, so chunk boundaries may fall anywhere, including
    inside a multi-byte character.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> List[str]:
        """Decode a chunk and return the lines it completed."""
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return lines

    @property
    def pending(self) -> str:
        return self._buffer


def _parse_line(line: str) -> Tuple[str, Any]:
    trimmed = line.strip()
    if not trimmed.startswith(DATA_PREFIX):
        return _SKIP, None
    data = trimmed[len(DATA_PREFIX):].strip()
    if not data:
        return _SKIP, None
    if data == DONE_SENTINEL:
        return _DONE, None
    try:
        return _EVENT, json.loads(data)
    except json.JSONDecodeError:
        logger.debug(f"Dropping malformed SSE frame: {data[:200]!r}")
        return _SKIP, None


def iter_sse_json(chunks: Iterable[bytes]) -> Iterator[Any]:
    """Yield the JSON payload of each ``data:`` frame in a byte stream.

    Stops at the ``[DONE]`` sentinel or when ``chunks`` is exhausted. An
    unterminated final line is discarded.
    """
    decoder = SSELineDecoder()
    for chunk in chunks:
        for line in decoder.feed(chunk):
            kind, value = _parse_line(line)
            if kind == _DONE:
                logger.debug("SSE stream finished with [DONE]")
                return
            if kind == _EVENT:
                yield value


async def aiter_sse_json(chunks: AsyncIterable[bytes]) -> AsyncIterator[Any]:
    """Async counterpart of :func:`iter_sse_json`."""
    decoder = SSELineDecoder()
    async for chunk in chunks:
        for line in decoder.feed(chunk):
            kind, value = _parse_line(line)
            if kind == _DONE:
                logger.debug("SSE stream finished with [DONE]")
                return
            if kind == _EVENT:
                yield value


def stream_error(status: int, text: str) -> LLMWiseError:
    """Build the error for a streaming response that failed upfront."""
    try:
        payload = json.loads(text)
    except ValueError:
        return LLMWiseError(text or "Request failed", status=status, payload=text or None)

    if isinstance(payload, dict) and "error" in payload:
        message = str(payload["error"] or "Request failed")
        return LLMWiseError(message, status=status, payload=payload)
    return LLMWiseError("Request failed", status=status, payload=payload)


def _check_no_body(response: httpx.Response) -> None:
    if response.status_code == httpx.codes.NO_CONTENT:
        raise LLMWiseError("No response body", status=NO_BODY_STATUS)


def stream_sse_json(response: httpx.Response) -> Iterator[Any]:
    """Decode a streaming ``httpx.Response`` into JSON events.

    Raises:
        LLMWiseError: If the response status is not a success, or the
            response carries no body
    """
    if not response.is_success:
        response.read()
        logger.debug(f"Stream request failed with HTTP {response.status_code}")
        raise stream_error(response.status_code, response.text)
    _check_no_body(response)
    return iter_sse_json(response.iter_bytes())


async def astream_sse_json(response: httpx.Response) -> AsyncIterator[Any]:
    """Async counterpart of :func:`stream_sse_json`."""
    if not response.is_success:
        await response.aread()
        logger.debug(f"Stream request failed with HTTP {response.status_code}")
        raise stream_error(response.status_code, response.text)
    _check_no_body(response)
    return aiter_sse_json(response.aiter_bytes())
