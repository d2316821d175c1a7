"""Where: src/soundsocial/platform/musicbrainz/http_client.py
What: HTTP adapter performing rate-limited, time-bounded JSON GET requests.
Why: Decouple network concerns from payload mapping and caching.

Every request first passes the shared ``RateLimiter``. Transport failures,
timeouts, non-2xx statuses (other than 404) and unparseable bodies raise
``RemoteUnavailableError``. A 404 is returned as a result with ``data=None``
so callers can decide whether absence is an error. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final, Protocol, cast

import requests

from soundsocial.platform.logging import logger
from soundsocial.shared.errors import RemoteUnavailableError

from .rate_limit import RateLimiter

HTTP_NOT_FOUND: Final[int] = 404


@dataclass(slots=True)
class HTTPResult:
    """Represent an HTTP response payload relevant to the MusicBrainz client."""

    status: int
    headers: dict[str, str]
    data: dict[str, Any] | None

    @property
    def not_found(self) -> bool:
        return self.status == HTTP_NOT_FOUND


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to fetch JSON payloads."""

    def get_json(self, url: str, params: Mapping[str, str]) -> HTTPResult:
        ...


class MusicBrainzHTTPClient:
    """Perform gated GET requests through a shared ``requests`` session."""

    def __init__(
        self,
        *,
        user_agent: str,
        rate_limiter: RateLimiter,
        timeout_seconds: float,
        session: requests.Session | None = None,
    ) -> None:
        self._rate_limiter: RateLimiter = rate_limiter
        self._timeout: float = timeout_seconds
        self._session: requests.Session = session or requests.Session()
        self._headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }

    @property
    def user_agent(self) -> str:
        return self._headers["User-Agent"]

    def get_json(self, url: str, params: Mapping[str, str]) -> HTTPResult:
        _ = self._rate_limiter.respect()
        try:
            response = self._session.get(
                url,
                params=dict(params),
                headers=self._headers,
                timeout=self._timeout,
            )
        except requests.Timeout as exc:
            logger.warning("Remote request timed out after %.1fs: %s", self._timeout, url)
            raise RemoteUnavailableError(f"Request to {url} timed out after {self._timeout:.1f}s") from exc
        except requests.RequestException as exc:
            logger.warning("Remote request error for %s: %s", url, exc)
            raise RemoteUnavailableError(f"Request to {url} failed: {exc}") from exc

        status = int(response.status_code)
        header_items = cast(Iterable[tuple[str, str]], response.headers.items())
        response_headers = {str(key): str(value) for key, value in header_items}

        if status == HTTP_NOT_FOUND:
            logger.debug("Remote resource not found: %s", url)
            return HTTPResult(status=status, headers=response_headers, data=None)

        if not 200 <= status < 300:
            logger.warning("Remote HTTP error: status=%s url=%s", status, url)
            raise RemoteUnavailableError(f"Request to {url} returned HTTP {status}")

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Remote JSON parse error for %s: %s", url, exc)
            raise RemoteUnavailableError(f"Response from {url} is not valid JSON") from exc

        if not isinstance(data, dict):
            raise RemoteUnavailableError(f"Response from {url} is not a JSON object")

        return HTTPResult(status=status, headers=response_headers, data=cast(dict[str, Any], data))

    def close(self) -> None:
        self._session.close()


__all__ = [
    "HTTPClient",
    "HTTPResult",
    "MusicBrainzHTTPClient",
]
