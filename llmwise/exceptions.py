"""LLMWise SDK exceptions."""

from typing import Any, Optional


class LLMWiseError(Exception):
    """Raised for any failed request or stream.

    Attributes:
        message: Human-readable message extracted from the error body
        status: HTTP status code of the failed response
        payload: Parsed JSON error body, the raw text when it is not JSON,
            or None when the body was empty
    """

    def __init__(
        self,
        message: str,
        status: int,
        payload: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    def __str__(self) -> str:
        if self.status:
            return f"[{self.status}] {self.message}"
        return self.message
