"""LLMWise SDK - Python client for the LLMWise multi-model gateway."""

from llmwise._utils import normalize_api_base
from llmwise.client import AsyncLLMWise, LLMWise
from llmwise.exceptions import LLMWiseError
from llmwise.models import (
    BlendRequest,
    BlendResponse,
    ChatRequest,
    ChatResponse,
    CompareRequest,
    CompareResponse,
    JudgeRequest,
    JudgeResponse,
    Message,
    StreamEvent,
)
from llmwise.sse import SSELineDecoder, iter_sse_json, aiter_sse_json

__version__ = "0.1.0"
__all__ = [
    "LLMWise",
    "AsyncLLMWise",
    "LLMWiseError",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "CompareRequest",
    "CompareResponse",
    "BlendRequest",
    "BlendResponse",
    "JudgeRequest",
    "JudgeResponse",
    "StreamEvent",
    "SSELineDecoder",
    "iter_sse_json",
    "aiter_sse_json",
    "normalize_api_base",
]
