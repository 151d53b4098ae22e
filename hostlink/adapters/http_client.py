"""Shared HTTP transport utilities for host adapters.

This module provides a thin wrapper around ``requests.Session`` so adapter
implementations share timeout policy and retry behavior.

Dependencies:
    - ``requests`` for network I/O.
    - ``hostlink.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``HttpAddServiceAdapter``.
    - Used only inside adapter layer methods; use cases interact through ports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from hostlink.adapters.api_errors import ApiError, ApiTimeoutError, InvalidHostError

_INVALID_URL_ERRORS = (
    req_exc.InvalidURL,
    req_exc.MissingSchema,
    req_exc.InvalidSchema,
    req_exc.URLRequired,
)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for each request attempt.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: float = 5
    retries: int = 1


class RetryingSession:
    """Shared requests wrapper with retry loops on connectivity failures.

    This class is intentionally transport-only. Callers decide how to map
    non-2xx responses into domain results.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None, session: Optional[requests.Session] = None) -> None:
        """Create a retry-enabled session.

        Args:
            cfg: Shared timeout and retry settings.
            session: Optional pre-built session (tests inject stubs here).
        """
        self.session = session if session is not None else requests.Session()
        self.cfg = cfg or HttpConfig()

    def _headers(self, accept: str) -> Dict[str, str]:
        return {"Accept": accept}

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/xml",
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Args:
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            accept: ``Accept`` header value.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first successful attempt.

        Raises:
            InvalidHostError: If ``requests`` rejects the URL itself.
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        context = f"GET {url}"
        last_err: ApiError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.get(
                    url,
                    params=params,
                    headers=self._headers(accept),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except _INVALID_URL_ERRORS as exc:
                raise InvalidHostError(f"Invalid host URL {url}: {exc}", context=context) from exc
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        if last_err is None:
            raise ApiError("Unexpected request failure", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]
