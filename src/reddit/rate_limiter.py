"""
Interval rate limiter for Reddit API requests.

Reddit's API guidelines ask unauthenticated clients for at most one
request every two seconds. IntervalRateLimiter enforces a minimum spacing
between consecutive grants across every caller in the process.
"""

import asyncio
import threading
import time
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class IntervalRateLimiter:
    """
    Minimum-interval rate limiter.

    Each caller reserves the next free slot (``max(now, last + interval)``)
    inside a critical section, then sleeps until that slot outside it.
    Reservations are handed out in arrival order and are always at least
    ``min_interval_ms`` apart.

    The critical section is a threading.Lock and never spans an await, so a
    single limiter can be shared by tasks on any event loop and any thread.
    """

    def __init__(self, min_interval_ms: int = 2000) -> None:
        """
        Initialize the rate limiter.

        Args:
            min_interval_ms: Minimum milliseconds between grants (default: 2000)
        """
        self.min_interval_ms = min_interval_ms
        self.min_interval = min_interval_ms / 1000.0
        self.last_grant: Optional[float] = None
        self.grants = 0
        self._lock = threading.Lock()

    def _reserve(self) -> float:
        with self._lock:
            now = time.monotonic()
            if self.last_grant is None:
                slot = now
            else:
                slot = max(now, self.last_grant + self.min_interval)
            self.last_grant = slot
            self.grants += 1
            return slot

    async def acquire(self) -> float:
        """
        Wait for permission to make an API call.

        Blocks until at least ``min_interval_ms`` has passed since the
        previous grant to any caller, then returns. The caller never wakes
        before its reserved slot, even if the event loop fires the timer
        a clock tick early.

        Returns:
            The grant time, in time.monotonic() seconds

        Example:
            >>> limiter = IntervalRateLimiter(min_interval_ms=2000)
            >>> await limiter.acquire()  # immediate
            >>> await limiter.acquire()  # ~2 seconds later
        """
        slot = self._reserve()
        wait = slot - time.monotonic()

        if wait > 0:
            logger.debug(
                "rate_limit_wait",
                wait_seconds=round(wait, 3),
                min_interval_ms=self.min_interval_ms,
            )
            while wait > 0:
                await asyncio.sleep(wait)
                wait = slot - time.monotonic()

        return slot

    def next_available_in(self) -> float:
        """
        Seconds until a new caller would be granted passage.

        Returns:
            0.0 if a call could proceed immediately
        """
        with self._lock:
            if self.last_grant is None:
                return 0.0
            return max(0.0, self.last_grant + self.min_interval - time.monotonic())

    def reset(self) -> None:
        """
        Forget all previous grants.

        Useful for testing or manual intervention.
        """
        with self._lock:
            self.last_grant = None
            self.grants = 0
        logger.info("rate_limiter_reset")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current rate limiter statistics.

        Example:
            >>> limiter.get_stats()
            {'grants': 3, 'min_interval_ms': 2000, 'next_available_in': 1.42}
        """
        return {
            "grants": self.grants,
            "min_interval_ms": self.min_interval_ms,
            "next_available_in": round(self.next_available_in(), 3),
        }


# Process-wide limiter shared by every client that is not given its own
rate_limiter = IntervalRateLimiter(min_interval_ms=2000)
