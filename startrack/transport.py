"""
Rate-limited HTTP transport for startrack.

Wraps a single outbound GitHub call: sends it, records the rate-limit
budget the response reports, backs off when the budget is nearly spent and
maps error statuses to typed exceptions. Requests are never retried here;
failures propagate to the caller.
"""

import time
from typing import Any

import httpx

from startrack.config import GitHubConfig
from startrack.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ParseError,
    RateLimitedError,
    ServerError,
    StarTrackError,
    TransportError,
    ValidationError,
)
from startrack.logging import log_http_request, log_http_response
from startrack.ratelimit import RateLimiter

STAR_MEDIA_TYPE = "application/vnd.github.v3.star+json"


class RateLimitedFetcher:
    """
    Async HTTP transport with rate-limit backoff.

    Handles:
    - Default GitHub headers (star media type, token authorization)
    - Rate-limit bookkeeping on every response, including error responses
    - Suspending before returning when the remaining budget is low
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        config: GitHubConfig | None = None,
        rate_limiter: RateLimiter | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            config: GitHub settings (token, base URL, timeout)
            rate_limiter: Shared limiter; a private one is created if omitted
            client: Pre-built httpx client (e.g. one using ``httpx.MockTransport``)
        """
        self.config = config or GitHubConfig()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.base_url = self.config.base_url.rstrip("/")

        self._client = client or httpx.AsyncClient(timeout=self.config.timeout)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedFetcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def url(self, path: str) -> str:
        """Resolve an API path against the configured base URL."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def default_headers(self) -> dict[str, str]:
        return {"Accept": STAR_MEDIA_TYPE, **self.config.auth_headers()}

    async def fetch(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        authenticate: bool = True,
    ) -> httpx.Response:
        """
        Make one request and honour the rate limit it reports.

        The backoff happens after the response is in hand, so it throttles
        the next call rather than this one.

        Args:
            url: Absolute URL or API path relative to the base URL
            headers: Extra headers, overriding the defaults
            method: HTTP method
            params: Query parameters
            json: JSON request body
            authenticate: Send the configured token (off for the OAuth exchange)

        Returns:
            The successful response

        Raises:
            TransportError: When no response was received
            StarTrackError: On error statuses (see ``_parse_error_response``)
        """
        full_url = self.url(url)
        defaults = self.default_headers()
        if not authenticate:
            defaults.pop("Authorization", None)
        request_headers = {**defaults, **(headers or {})}

        log_http_request(method, full_url, request_headers, params)
        started = time.monotonic()
        try:
            response = await self._client.request(
                method, full_url, headers=request_headers, params=params, json=json
            )
        except httpx.RequestError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        state = self.rate_limiter.update(response.headers)
        log_http_response(
            response.status_code,
            full_url,
            remaining=state.remaining,
            elapsed_ms=(time.monotonic() - started) * 1000,
        )

        await self.rate_limiter.wait_if_needed()

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        return response

    async def fetch_json(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        authenticate: bool = True,
    ) -> Any:
        """Like ``fetch`` but decode the body as JSON, raising ``ParseError`` on failure."""
        response = await self.fetch(
            url, headers, method=method, params=params, json=json, authenticate=authenticate
        )
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"invalid JSON from {response.request.url}: {e}") from e

    def _parse_error_response(self, response: httpx.Response) -> StarTrackError:
        """
        Parse an error response into a typed exception.

        GitHub error bodies look like ``{"message": "...", "documentation_url": "..."}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate StarTrackError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        message = data.get("message") or f"HTTP {response.status_code}"
        status_code = response.status_code

        if status_code == 401:
            return AuthenticationError("UNAUTHORIZED", message, status_code)
        elif status_code == 403:
            return AuthorizationError("FORBIDDEN", message, status_code)
        elif status_code == 404:
            return NotFoundError("NOT_FOUND", message, status_code)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError("RATE_LIMITED", message, retry_after, status_code)
        elif status_code >= 500:
            return ServerError("SERVER_ERROR", message, status_code)
        else:
            return ValidationError("CLIENT_ERROR", message, status_code)
