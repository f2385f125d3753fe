"""URL, header and query-string helpers shared by the clients."""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, urlencode

DEFAULT_API_BASE = "https://llmwise.ai/api/v1"
API_VERSION_PATH = "/api/v1"


def normalize_api_base(base_url: Optional[str] = None) -> str:
    """Normalize a caller-supplied base URL.

    Whitespace and trailing slashes are removed, an empty value falls back to
    the production endpoint, and ``/api/v1`` is appended when missing.
    """
    raw = (base_url or "").strip().rstrip("/")
    if not raw:
        return DEFAULT_API_BASE
    if raw.endswith(API_VERSION_PATH):
        return raw
    return f"{raw}{API_VERSION_PATH}"


def auth_headers(api_key: Optional[str] = None) -> Dict[str, str]:
    if not api_key:
        return {}
    return {"Authorization": f"Bearer {api_key}"}


def _query_value(value: Any) -> str:
    # JSON spelling of booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Optional[Mapping[str, Any]] = None) -> str:
    """Encode query parameters, skipping entries whose value is None."""
    if not params:
        return ""
    pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs)


def build_query(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    query = encode_query(params)
    if not query:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def path_segment(value: Any) -> str:
    """Quote an identifier for use as a single path segment."""
    return quote(str(value), safe="")


def drop_none(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
