"""Endpoint wrappers shared by the sync and async clients.

Every method delegates to ``self._request``, which returns the decoded body
in :class:`llmwise.LLMWise` and an awaitable of it in
:class:`llmwise.AsyncLLMWise`. Return annotations therefore describe the
decoded body only.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from llmwise._utils import drop_none, path_segment
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
)

RequestT = TypeVar("RequestT", ChatRequest, CompareRequest, BlendRequest, JudgeRequest)
MessageInput = Union[Message, Dict[str, Any]]

# Marks an argument the caller did not pass
NOT_GIVEN: Any = object()


def completion_body(
    request_cls: Type[RequestT],
    fields: Mapping[str, Any],
    stream: bool,
) -> Dict[str, Any]:
    """Validate request fields and build the JSON body.

    The ``stream`` flag is owned by the client: a caller-supplied value is
    ignored.
    """
    values = {key: value for key, value in fields.items() if key != "stream"}
    request = request_cls(stream=stream, **values)
    return request.model_dump(exclude_none=True)


class _Endpoints:
    """REST endpoints of the gateway."""

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
        raise NotImplementedError

    # Completions

    def chat(self, model: str, messages: Sequence[MessageInput], **options: Any) -> ChatResponse:
        """
        Create a chat completion with a single model.

        Args:
            model: Model id, or "auto" to let the gateway route
            messages: Conversation messages (Message or dict)
            **options: Other ChatRequest fields (temperature, max_tokens,
                cost_saver, optimization_goal, routing, conversation_id, ...)

        Returns:
            ChatResponse
        """
        body = completion_body(ChatRequest, dict(options, model=model, messages=messages), stream=False)
        return self._request("POST", "/chat", body=body, cast_to=ChatResponse)

    def compare(self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any) -> CompareResponse:
        """Run the same conversation against several models side by side."""
        body = completion_body(CompareRequest, dict(options, models=models, messages=messages), stream=False)
        return self._request("POST", "/compare", body=body, cast_to=CompareResponse)

    def blend(self, models: Sequence[str], messages: Sequence[MessageInput], **options: Any) -> BlendResponse:
        """
        Blend answers from several models into one.

        Args:
            models: Source models
            messages: Conversation messages
            **options: Other BlendRequest fields (strategy, synthesizer,
                layers, samples, ...)
        """
        body = completion_body(BlendRequest, dict(options, models=models, messages=messages), stream=False)
        return self._request("POST", "/blend", body=body, cast_to=BlendResponse)

    def judge(
        self,
        contestants: Sequence[str],
        judge: str,
        messages: Sequence[MessageInput],
        **options: Any,
    ) -> JudgeResponse:
        """Have ``judge`` evaluate the answers of ``contestants``."""
        fields = dict(options, contestants=contestants, judge=judge, messages=messages)
        body = completion_body(JudgeRequest, fields, stream=False)
        return self._request("POST", "/judge", body=body, cast_to=JudgeResponse)

    # Models and credits

    def models(self) -> List[Dict[str, Any]]:
        """List models available through the gateway."""
        return self._request("GET", "/models")

    def credits_balance(self) -> Dict[str, Any]:
        return self._request("GET", "/credits/balance")

    def credits_wallet(self) -> Dict[str, Any]:
        return self._request("GET", "/credits/wallet")

    def credits_transactions(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._request("GET", "/credits/transactions", params={"limit": limit, "offset": offset})

    def credits_packs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/credits/packs")

    def credits_purchase(
        self,
        amount_usd: Optional[float] = None,
        pack_id: Optional[str] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Start a credit purchase, either a custom amount or a pack."""
        body = drop_none(dict(extra, amount_usd=amount_usd, pack_id=pack_id))
        return self._request("POST", "/credits/purchase", body=body)

    def credits_confirm_checkout(self, session_id: str) -> Dict[str, Any]:
        return self._request("POST", "/credits/confirm-checkout", body={"session_id": session_id})

    def credits_auto_topup(
        self,
        enabled: bool,
        threshold_credits: Optional[float] = None,
        amount_usd: Optional[float] = None,
        monthly_cap_usd: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Configure automatic top-up when the balance drops below a threshold."""
        body = drop_none(
            {
                "enabled": enabled,
                "threshold_credits": threshold_credits,
                "amount_usd": amount_usd,
                "monthly_cap_usd": monthly_cap_usd,
            }
        )
        return self._request("PUT", "/credits/auto-topup", body=body)

    # Conversations and history

    def conversations(self, limit: Optional[int] = None, offset: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/conversations", params={"limit": limit, "offset": offset})

    def get_conversation(self, conversation_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/conversations/{path_segment(conversation_id)}")

    def create_conversation(self) -> Dict[str, Any]:
        return self._request("POST", "/conversations", body={})

    def update_conversation(self, conversation_id: str, title: Optional[str] = NOT_GIVEN) -> Dict[str, Any]:
        """Update a conversation. ``None`` clears the title; omit it to leave the title unchanged."""
        params: Dict[str, Any] = {}
        if title is not NOT_GIVEN:
            params["title"] = "" if title is None else title
        return self._request("PATCH", f"/conversations/{path_segment(conversation_id)}", params=params)

    def delete_conversation(self, conversation_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/conversations/{path_segment(conversation_id)}")

    def history(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        mode: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {"limit": limit, "offset": offset, "mode": mode, "search": search}
        return self._request("GET", "/history", params=params)

    def get_history_detail(self, request_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/history/{path_segment(request_id)}")

    # Usage

    def usage_summary(self, days: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/usage/summary", params={"days": days})

    def usage_recent(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        days: Optional[int] = None,
        mode: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {"limit": limit, "offset": offset, "days": days, "mode": mode}
        return self._request("GET", "/usage/recent", params=params)

    # API keys

    def keys_info(self) -> Dict[str, Any]:
        return self._request("GET", "/keys/info")

    def keys_generate(self) -> Dict[str, Any]:
        """Generate a new API key. The previous key stops working."""
        return self._request("POST", "/keys/generate", body={})

    def revoke_api_key(self) -> Dict[str, Any]:
        return self._request("DELETE", "/keys/revoke")

    # Semantic memory

    def memory(self, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/memory", params={"limit": limit})

    def memory_search(
        self,
        q: str,
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> Dict[str, Any]:
        params = {"q": q, "top_k": top_k, "min_score": min_score}
        return self._request("GET", "/memory/search", params=params)

    def memory_delete(self, memory_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/memory/{path_segment(memory_id)}")

    def memory_clear(self) -> Dict[str, Any]:
        return self._request("DELETE", "/memory")

    # Optimization

    def optimization_policy(self) -> Dict[str, Any]:
        return self._request("GET", "/optimization/policy")

    def optimization_update_policy(self, policy: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", "/optimization/policy", body=dict(policy))

    def optimization_report(
        self,
        goal: Optional[str] = None,
        days: Optional[int] = None,
        min_calls_per_model: Optional[int] = None,
        use_policy: Optional[bool] = None,
        persist_snapshot: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Build a routing optimization report from recent traffic.

        Args:
            goal: One of balanced, latency, cost, reliability
            days: Lookback window
            min_calls_per_model: Ignore models with fewer calls
            use_policy: Apply the saved optimization policy
            persist_snapshot: Store the report as a snapshot
        """
        params = {
            "goal": goal,
            "days": days,
            "min_calls_per_model": min_calls_per_model,
            "use_policy": use_policy,
            "persist_snapshot": persist_snapshot,
        }
        return self._request("GET", "/optimization/report", params=params)

    def optimization_evaluate(self) -> Dict[str, Any]:
        return self._request("POST", "/optimization/evaluate", body={})

    def optimization_replay(self, days: Optional[int] = None, sample_size: Optional[int] = None) -> Dict[str, Any]:
        body = drop_none({"days": days, "sample_size": sample_size})
        return self._request("POST", "/optimization/replay", body=body)

    def optimization_snapshots(self, goal: Optional[str] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/optimization/snapshots", params={"goal": goal, "limit": limit})

    def optimization_alerts(self, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/optimization/alerts", params={"limit": limit})

    def optimization_test_templates(self) -> Dict[str, Any]:
        return self._request("GET", "/optimization/test-templates")

    def optimization_test_suites(self, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/optimization/test-suites", params={"limit": limit})

    def optimization_create_test_suite(self, suite: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/optimization/test-suites", body=dict(suite))

    def optimization_update_test_suite(self, suite_id: str, suite: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/optimization/test-suites/{path_segment(suite_id)}", body=dict(suite))

    def optimization_run_test_suite(self, suite_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/optimization/test-suites/{path_segment(suite_id)}/run", body={})

    def optimization_test_runs(self, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/optimization/test-runs", params={"limit": limit})

    def optimization_test_run_csv(self, run_id: str) -> str:
        """Export a test run as CSV text."""
        return self._request("GET", f"/optimization/test-runs/{path_segment(run_id)}/csv", raw_text=True)

    def optimization_regression_schedules(self, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/optimization/regression-schedules", params={"limit": limit})

    def optimization_create_regression_schedule(self, schedule: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/optimization/regression-schedules", body=dict(schedule))

    def optimization_update_regression_schedule(
        self,
        schedule_id: str,
        schedule: Mapping[str, Any],
    ) -> Dict[str, Any]:
        path = f"/optimization/regression-schedules/{path_segment(schedule_id)}"
        return self._request("PUT", path, body=dict(schedule))

    def optimization_run_regression_schedule(self, schedule_id: str) -> Dict[str, Any]:
        path = f"/optimization/regression-schedules/{path_segment(schedule_id)}/run"
        return self._request("POST", path, body={})

    # Settings

    def settings_keys(self) -> Dict[str, Any]:
        return self._request("GET", "/settings/keys")

    def settings_save_keys(self, keys: Mapping[str, str]) -> Dict[str, Any]:
        """Save provider keys (BYOK), e.g. ``{"openai": "sk-..."}``."""
        return self._request("PUT", "/settings/keys", body={"keys": dict(keys)})

    def settings_delete_key(self, provider: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/settings/keys/{path_segment(provider)}")

    def settings_privacy(self) -> Dict[str, Any]:
        return self._request("GET", "/settings/privacy")

    def settings_update_privacy(
        self,
        data_training_opt_in: Optional[bool] = None,
        zero_retention_mode: Optional[bool] = None,
        purge_existing_data: Optional[bool] = None,
    ) -> Dict[str, Any]:
        body = drop_none(
            {
                "data_training_opt_in": data_training_opt_in,
                "zero_retention_mode": zero_retention_mode,
                "purge_existing_data": purge_existing_data,
            }
        )
        return self._request("PUT", "/settings/privacy", body=body)

    def settings_copilot_state(self) -> Dict[str, Any]:
        return self._request("GET", "/settings/copilot")

    def settings_update_copilot(
        self,
        goal: Optional[str] = None,
        onboarded: Optional[bool] = None,
        checklist: Optional[Mapping[str, bool]] = None,
    ) -> Dict[str, Any]:
        body = drop_none(
            {
                "goal": goal,
                "onboarded": onboarded,
                "checklist": dict(checklist) if checklist is not None else None,
            }
        )
        return self._request("PUT", "/settings/copilot", body=body)

    def settings_ask_copilot(
        self,
        question: str,
        path: Optional[str] = None,
        context: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        body = drop_none(
            {
                "question": question,
                "path": path,
                "context": dict(context) if context is not None else None,
            }
        )
        return self._request("POST", "/settings/copilot/ask", body=body)
