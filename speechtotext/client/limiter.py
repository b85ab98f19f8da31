"""
Token Bucket Rate Limiter

Caps audio submission to one event per interval regardless of how fast the
input can be read, so a file on stdin is paced like a live microphone.
"""

import asyncio
import time
from collections.abc import Callable


class RateLimiter:
    """
    Token bucket with a fixed refill interval.

    The bucket starts full. Each wait() takes one token, sleeping until the
    token has accrued if the bucket is empty. An interval of zero or less
    disables limiting.

    Usage:
        limiter = RateLimiter(interval=0.001)
        while True:
            await limiter.wait()
            send_next()
    """

    def __init__(
        self,
        interval: float,
        burst: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the limiter.

        Args:
            interval: Seconds to refill one token
            burst: Bucket capacity
            clock: Monotonic time source in seconds
        """
        self.interval = interval
        self.burst = burst
        self._clock = clock
        self._tokens = float(burst)
        self._last = clock()

    def reserve(self) -> float:
        """
        Take one token and return how long the caller must wait for it.

        The bucket may go negative; the debt is paid back by later refills,
        which is what spaces consecutive events one interval apart.
        """
        if self.interval <= 0:
            return 0.0

        now = self._clock()
        elapsed = max(0.0, now - self._last)
        self._last = now
        self._tokens = min(float(self.burst), self._tokens + elapsed / self.interval)
        self._tokens -= 1.0

        if self._tokens >= 0:
            return 0.0
        return -self._tokens * self.interval

    async def wait(self) -> None:
        """Wait until one event is allowed."""
        delay = self.reserve()
        if delay > 0:
            await asyncio.sleep(delay)
