"""LLMWise SDK data models.

The gateway only partially documents its payloads, so every model keeps the
known fields typed and lets unknown keys through (``extra="allow"``).
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["system", "user", "assistant"]
OptimizationGoal = Literal["balanced", "latency", "cost", "reliability"]
BlendStrategy = Literal["consensus", "council", "best_of", "chain", "moa", "self_moa"]


class _OpenModel(BaseModel):
    model_config = ConfigDict(extra="allow", protected_namespaces=())


class TextBlock(_OpenModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ImageURL(_OpenModel):
    url: str


class ImageBlock(_OpenModel):
    """Image content block referencing a URL or data URI."""

    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentBlock = Union[TextBlock, ImageBlock]


class Message(_OpenModel):
    """A single message in a conversation."""

    role: Role
    content: Union[str, List[ContentBlock]]


class RoutingConfig(_OpenModel):
    """Fallback chain used when the primary model fails."""

    fallback: List[str] = Field(default_factory=list)
    strategy: Optional[str] = None


# Requests


class _CompletionRequest(_OpenModel):
    messages: List[Message]
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    stream: bool = False
    semantic_memory: Optional[bool] = None
    semantic_top_k: Optional[int] = None
    semantic_min_score: Optional[float] = None
    conversation_id: Optional[str] = None


class ChatRequest(_CompletionRequest):
    """Request for a single-model chat completion."""

    model: str
    cost_saver: Optional[bool] = None
    optimization_goal: Optional[OptimizationGoal] = None
    routing: Optional[RoutingConfig] = None


class CompareRequest(_CompletionRequest):
    """Request to run the same prompt against several models."""

    models: List[str]


class BlendRequest(_CompletionRequest):
    """Request to synthesize one answer from several models."""

    models: List[str]
    strategy: Optional[BlendStrategy] = None
    synthesizer: Optional[str] = None
    layers: Optional[int] = None
    samples: Optional[int] = None


class JudgeRequest(_CompletionRequest):
    """Request to have a judge model pick the best contestant answer."""

    contestants: List[str]
    judge: str
    criteria: Optional[List[str]] = None


# Responses


class _BillingMixin(_OpenModel):
    credits_charged: Optional[float] = None
    credits_remaining: Optional[float] = None
    conversation_id: Optional[str] = None
    semantic_memory_used: Optional[bool] = None
    semantic_memory_hits: Optional[int] = None


class ChatResponse(_BillingMixin):
    """Response from a chat completion."""

    id: str
    model: str
    content: str
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    latency_ms: Optional[float] = None
    cost: Optional[float] = None
    finish_reason: Optional[str] = None
    mode: Optional[str] = None
    resolved_model: Optional[str] = None
    auto_strategy: Optional[str] = None
    optimization_goal: Optional[OptimizationGoal] = None


class CompareResponseItem(_OpenModel):
    model: str
    content: Optional[str] = None
    latency_ms: Optional[float] = None
    completion_tokens: Optional[int] = None
    cost: Optional[float] = None


class CompareSummary(_OpenModel):
    fastest: Optional[str] = None
    longest: Optional[str] = None


class CompareResponse(_BillingMixin):
    """Response from a compare call, one item per model."""

    id: str
    responses: List[CompareResponseItem]
    summary: Optional[CompareSummary] = None


class BlendResponse(_BillingMixin):
    """Response from a blend call."""

    id: str
    content: str
    strategy: Optional[str] = None
    source_models: Optional[List[str]] = None
    synthesizer: Optional[str] = None
    latency_ms: Optional[float] = None
    candidates: Optional[int] = None
    layers: Optional[int] = None


class JudgeContestantResult(_OpenModel):
    model: str
    latency_ms: Optional[float] = None
    status: Optional[str] = None


class JudgeWinnerResponse(_OpenModel):
    model: str
    content: str


class JudgeResponse(_BillingMixin):
    """Response from a judge call."""

    id: str
    verdict: Any = None
    winner_response: JudgeWinnerResponse
    contestants: List[JudgeContestantResult]


# Streaming


class TraceEntry(_OpenModel):
    model: str
    status: str
    status_code: Optional[int] = None
    latency_ms: Optional[float] = None


class ModelStats(_OpenModel):
    latency_ms: float
    tokens: int


class StreamEvent(_OpenModel):
    """One decoded server-sent event.

    Blend and judge streams add their own fields, which are kept as extras.
    """

    # Common
    model: Optional[str] = None
    delta: Optional[str] = None
    done: Optional[bool] = None
    error: Optional[str] = None
    event: Optional[str] = None
    status: Optional[str] = None
    status_code: Optional[int] = None
    latency_ms: Optional[float] = None
    content_length: Optional[int] = None

    # Metrics
    ttft_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    tokens_per_second: Optional[float] = None
    cost: Optional[float] = None
    finish_reason: Optional[str] = None

    # Billing / metadata
    credits_charged: Optional[float] = None
    credits_remaining: Optional[float] = None
    byok: Optional[bool] = None
    conversation_id: Optional[str] = None
    resolved_model: Optional[str] = None
    auto_strategy: Optional[str] = None
    optimization_goal: Optional[OptimizationGoal] = None

    # Fallback trace
    trace: Optional[List[TraceEntry]] = None
    final_model: Optional[str] = None
    saved_ms: Optional[float] = None

    # Compare
    fastest: Optional[str] = None
    longest: Optional[str] = None
    models: Optional[Dict[str, ModelStats]] = None
