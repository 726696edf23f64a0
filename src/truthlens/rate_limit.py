from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Windowed request budget for outbound fact-check queries.

    Once the budget for the current window is spent, the caller is suspended
    for ``backoff`` seconds and a fresh window starts. Nothing is rejected.
    """

    def __init__(
        self,
        max_requests_per_minute: int = 30,
        *,
        window: float = 60.0,
        backoff: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_requests = max_requests_per_minute
        self.window = window
        self.backoff = backoff
        self._clock = clock
        self._sleep = sleep
        self.request_count = 0
        self.window_started = clock()
        self.suspensions = 0

    async def acquire(self) -> None:
        now = self._clock()
        if now - self.window_started > self.window:
            self.request_count = 0
            self.window_started = now

        if self.request_count >= self.max_requests:
            self.suspensions += 1
            logger.info(
                "Fact-check budget of %d/min spent; backing off %.1fs",
                self.max_requests,
                self.backoff,
            )
            await self._sleep(self.backoff)
            self.request_count = 0
            self.window_started = self._clock()

        self.request_count += 1

    def get_remaining(self) -> int:
        if self._clock() - self.window_started > self.window:
            return self.max_requests
        return max(0, self.max_requests - self.request_count)
