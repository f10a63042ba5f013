"""
GitHub rate-limit tracking.

GitHub reports the remaining request budget and the epoch second at which
it resets on every REST response:

    X-RateLimit-Remaining: 4999
    X-RateLimit-Reset: 1372700873

When the budget runs low the limiter suspends the caller until the window
resets, so the next request goes out with a fresh budget.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from startrack.logging import get_logger

logger = get_logger("http")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RateLimitState:
    """Rate-limit budget read from a single response."""

    remaining: int
    reset_at: int  # epoch seconds

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitState":
        """
        Read the budget from response headers.

        Absent or unparseable values default to 0. Header lookups are
        case-insensitive when ``headers`` is an ``httpx.Headers``; plain dicts
        are checked for both the lower-case and the canonical spelling.
        """
        return cls(
            remaining=_header_int(headers, "x-ratelimit-remaining", "X-RateLimit-Remaining"),
            reset_at=_header_int(headers, "x-ratelimit-reset", "X-RateLimit-Reset"),
        )


def _header_int(headers: Mapping[str, str], *names: str) -> int:
    for name in names:
        value = headers.get(name)
        if value:
            try:
                return int(float(value))
            except (TypeError, ValueError):
                return 0
    return 0


class RateLimiter:
    """
    Process-wide rate-limit state with a blocking backoff.

    The state is replaced on every response (never merged). ``clock`` returns
    epoch seconds and ``sleep`` suspends for a number of seconds; both are
    injectable so tests can run without waiting.
    """

    def __init__(
        self,
        threshold: int = 10,
        padding_ms: int = 1000,
        clock: Clock | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.threshold = threshold
        self.padding_ms = padding_ms
        self._clock = clock or time.time
        self._sleep = sleep or asyncio.sleep
        self.state: RateLimitState | None = None

    def update(self, headers: Mapping[str, str]) -> RateLimitState:
        """Replace the current state with the budget reported by ``headers``."""
        self.state = RateLimitState.from_headers(headers)
        return self.state

    def delay_ms(self, state: RateLimitState | None = None) -> int:
        """
        Milliseconds to wait before the next request, 0 if no wait is needed.

        Only a budget below ``threshold`` triggers a wait, lasting until one
        padding interval past the reset time.
        """
        state = state or self.state
        if state is None or state.remaining >= self.threshold:
            return 0
        now_ms = int(self._clock() * 1000)
        delay = state.reset_at * 1000 - now_ms + self.padding_ms
        return max(delay, 0)

    async def wait_if_needed(self) -> float:
        """
        Suspend until the rate-limit window resets if the budget is low.

        Returns:
            The number of seconds slept (0.0 when no wait was needed)
        """
        delay = self.delay_ms()
        if delay <= 0:
            return 0.0
        seconds = delay / 1000
        logger.info(
            "waiting for the rate limit: remaining=%s, sleeping %.1fs",
            self.state.remaining if self.state else 0,
            seconds,
        )
        await self._sleep(seconds)
        return seconds
