from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for host HTTP adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class InvalidHostError(ApiError):
    """The HTTP stack rejected the address itself (not a reachability problem)."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


class HostResponseError(ApiError):
    """Host answered, but not with a usable server-info document."""


def build_error_message(ctx: str, status: Optional[int], detail: Optional[str] = None) -> str:
    text = (detail or "").strip()
    if status is None:
        return f"{ctx}: {text}" if text else ctx
    if text:
        return f"{ctx}: {text} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def snippet(resp: Any, *, limit: int = 200) -> Optional[str]:
    """Best-effort short body excerpt for logs, without raising."""
    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    cleaned = text.strip()
    return cleaned[:limit] if cleaned else None
