"""
Tests for IntervalRateLimiter.

Tests cover:
- Immediate first grant
- Waiting out the interval between grants
- Grant spacing under concurrent tasks and threads
- Stats, reset and logging
"""

import asyncio
import threading
import time
from unittest.mock import patch

import pytest

from src.reddit.rate_limiter import IntervalRateLimiter, rate_limiter

# Float slack for comparing sums of monotonic timestamps
EPSILON = 1e-9


class TestIntervalRateLimiter:
    """Test suite for IntervalRateLimiter."""

    def test_initialization(self):
        """Test rate limiter starts with no grants."""
        limiter = IntervalRateLimiter(min_interval_ms=500)

        assert limiter.min_interval_ms == 500
        assert limiter.min_interval == 0.5
        assert limiter.last_grant is None
        assert limiter.grants == 0
        assert limiter.next_available_in() == 0.0

    def test_shared_instance_uses_reddit_interval(self):
        """Test the process-wide limiter spaces requests two seconds apart."""
        assert rate_limiter.min_interval_ms == 2000

    @pytest.mark.asyncio
    async def test_first_acquire_is_immediate(self):
        """Test the first grant does not wait."""
        limiter = IntervalRateLimiter(min_interval_ms=2000)

        start = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - start < 0.1
        assert limiter.grants == 1

    @pytest.mark.asyncio
    async def test_second_acquire_waits_for_interval(self):
        """Test a second grant waits out the remaining interval."""
        limiter = IntervalRateLimiter(min_interval_ms=200)

        first = await limiter.acquire()
        start = time.monotonic()
        second = await limiter.acquire()
        waited = time.monotonic() - start

        assert second - first >= 0.2 - EPSILON
        assert 0.15 <= waited <= 0.5

    @pytest.mark.asyncio
    async def test_no_wait_after_interval_passed(self):
        """Test a caller arriving after the interval proceeds at once."""
        limiter = IntervalRateLimiter(min_interval_ms=50)

        await limiter.acquire()
        await asyncio.sleep(0.1)

        start = time.monotonic()
        await limiter.acquire()
        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_concurrent_grants_are_spaced(self):
        """Test concurrent callers are granted at least one interval apart."""
        limiter = IntervalRateLimiter(min_interval_ms=50)

        grants = await asyncio.gather(*(limiter.acquire() for _ in range(6)))

        ordered = sorted(grants)
        gaps = [b - a for a, b in zip(ordered, ordered[1:])]
        assert len(gaps) == 5
        assert all(gap >= 0.05 - EPSILON for gap in gaps)
        assert limiter.grants == 6

    @pytest.mark.asyncio
    async def test_never_wakes_before_slot(self):
        """Test a timer that fires early is waited out before returning."""
        limiter = IntervalRateLimiter(min_interval_ms=100)
        real_sleep = asyncio.sleep
        requested = []

        async def early_sleep(delay):
            requested.append(delay)
            # Fire well before the requested delay on the first call
            await real_sleep(delay / 2 if len(requested) == 1 else delay)

        await limiter.acquire()
        with patch("src.reddit.rate_limiter.asyncio.sleep", side_effect=early_sleep):
            slot = await limiter.acquire()
            woke = time.monotonic()

        assert woke >= slot
        assert len(requested) >= 2

    @pytest.mark.asyncio
    async def test_grants_follow_arrival_order(self):
        """Test callers are served first come, first served."""
        limiter = IntervalRateLimiter(min_interval_ms=30)
        order = []

        async def caller(n):
            await limiter.acquire()
            order.append(n)

        await asyncio.gather(*(caller(n) for n in range(5)))

        assert order == [0, 1, 2, 3, 4]

    def test_grants_are_spaced_across_threads(self):
        """Test callers on separate threads and event loops share one schedule."""
        limiter = IntervalRateLimiter(min_interval_ms=50)
        grants = []
        grants_lock = threading.Lock()

        def worker():
            granted = asyncio.run(limiter.acquire())
            with grants_lock:
                grants.append(granted)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        ordered = sorted(grants)
        assert len(ordered) == 4
        assert all(b - a >= 0.05 - EPSILON for a, b in zip(ordered, ordered[1:]))

    @pytest.mark.asyncio
    async def test_cancelled_waiter_keeps_its_slot(self):
        """Test cancelling a waiting caller does not let the next one in early."""
        limiter = IntervalRateLimiter(min_interval_ms=100)

        first = await limiter.acquire()
        waiting = asyncio.ensure_future(limiter.acquire())
        await asyncio.sleep(0)
        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting

        third = await limiter.acquire()
        assert third - first >= 0.2 - EPSILON

    @pytest.mark.asyncio
    async def test_zero_interval_never_waits(self):
        """Test a zero interval grants everyone immediately."""
        limiter = IntervalRateLimiter(min_interval_ms=0)

        start = time.monotonic()
        for _ in range(20):
            await limiter.acquire()

        assert time.monotonic() - start < 0.1
        assert limiter.grants == 20

    @pytest.mark.asyncio
    async def test_next_available_in(self):
        """Test next_available_in() reports the remaining wait."""
        limiter = IntervalRateLimiter(min_interval_ms=2000)

        await limiter.acquire()

        remaining = limiter.next_available_in()
        assert 1.5 < remaining <= 2.0

    @pytest.mark.asyncio
    async def test_reset(self):
        """Test reset() forgets previous grants."""
        limiter = IntervalRateLimiter(min_interval_ms=2000)
        await limiter.acquire()

        limiter.reset()

        assert limiter.last_grant is None
        assert limiter.grants == 0
        start = time.monotonic()
        await limiter.acquire()
        assert time.monotonic() - start < 0.1

    @pytest.mark.asyncio
    async def test_get_stats(self):
        """Test get_stats() reports grants and interval."""
        limiter = IntervalRateLimiter(min_interval_ms=2000)

        stats = limiter.get_stats()
        assert stats == {"grants": 0, "min_interval_ms": 2000, "next_available_in": 0.0}

        await limiter.acquire()

        stats = limiter.get_stats()
        assert stats["grants"] == 1
        assert stats["next_available_in"] > 0

    @pytest.mark.asyncio
    async def test_wait_is_logged(self):
        """Test that a caller that has to wait logs rate_limit_wait."""
        limiter = IntervalRateLimiter(min_interval_ms=20)
        await limiter.acquire()

        with patch("src.reddit.rate_limiter.logger") as mock_logger:
            await limiter.acquire()

        assert any(
            call[0][0] == "rate_limit_wait"
            for call in mock_logger.debug.call_args_list
        )
