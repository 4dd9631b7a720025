"""Unit tests for the fixed-window rate limiter.

Tests cover:
- Counting hits within a window
- Budget exhaustion and rollover
- Time until reset
- Clearing a key
- Exact counts under concurrent hits
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from catalog_service.cache.rate_limit import RateLimiter
from tests.fixtures.clock import FakeClock


pytestmark = pytest.mark.unit

KEY = "catalog_api_requests"


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    """Create a limiter on the fake clock."""
    return RateLimiter(clock=clock)


class TestHit:
    """Tests for recording attempts."""

    def test_first_hit_opens_window(self, limiter: RateLimiter) -> None:
        """Should return 1 on the first hit."""
        assert limiter.hit(KEY, 60) == 1
        assert limiter.attempts(KEY) == 1

    def test_counts_increase(self, limiter: RateLimiter) -> None:
        """Should return the running count."""
        counts = [limiter.hit(KEY, 60) for _ in range(5)]
        assert counts == [1, 2, 3, 4, 5]

    def test_keys_are_independent(self, limiter: RateLimiter) -> None:
        """Should keep separate windows per key."""
        limiter.hit(KEY, 60)
        limiter.hit(KEY, 60)
        limiter.hit("other", 60)

        assert limiter.attempts(KEY) == 2
        assert limiter.attempts("other") == 1

    def test_hits_do_not_extend_window(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        """Should reset relative to the first hit, not the latest."""
        limiter.hit(KEY, 60)
        clock.advance(50)
        limiter.hit(KEY, 60)
        clock.advance(10)

        assert limiter.attempts(KEY) == 0
        assert limiter.hit(KEY, 60) == 1


class TestTooManyAttempts:
    """Tests for budget exhaustion."""

    def test_false_without_window(self, limiter: RateLimiter) -> None:
        """Should not be limited before any hit."""
        assert limiter.too_many_attempts(KEY, 100) is False

    def test_hundred_hits_exhaust_budget(self, limiter: RateLimiter) -> None:
        """Should be limited after 100 hits with a maximum of 100."""
        for _ in range(99):
            limiter.hit(KEY, 60)
        assert limiter.too_many_attempts(KEY, 100) is False

        limiter.hit(KEY, 60)
        assert limiter.too_many_attempts(KEY, 100) is True

    def test_rollover_restores_budget(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        """Should allow attempts again once the window has passed."""
        for _ in range(100):
            limiter.hit(KEY, 60)
        clock.advance(60)

        assert limiter.too_many_attempts(KEY, 100) is False
        assert limiter.hit(KEY, 60) == 1


class TestAvailableIn:
    """Tests for time until reset."""

    def test_zero_without_window(self, limiter: RateLimiter) -> None:
        """Should return 0 when no window is live."""
        assert limiter.available_in(KEY) == 0

    def test_counts_down(self, limiter: RateLimiter, clock: FakeClock) -> None:
        """Should return whole seconds until the window resets."""
        limiter.hit(KEY, 60)
        assert limiter.available_in(KEY) == 60

        clock.advance(15)
        assert limiter.available_in(KEY) == 45

    def test_rounds_up(self, limiter: RateLimiter, clock: FakeClock) -> None:
        """Should round partial seconds up."""
        limiter.hit(KEY, 60)
        clock.advance(59.2)
        assert limiter.available_in(KEY) == 1

    def test_zero_after_expiry(self, limiter: RateLimiter, clock: FakeClock) -> None:
        """Should return 0 once the window has passed."""
        limiter.hit(KEY, 60)
        clock.advance(61)
        assert limiter.available_in(KEY) == 0


class TestRemainingAndClear:
    """Tests for remaining budget and administrative reset."""

    def test_remaining(self, limiter: RateLimiter) -> None:
        """Should subtract attempts from the maximum."""
        for _ in range(3):
            limiter.hit(KEY, 60)
        assert limiter.remaining(KEY, 100) == 97

    def test_remaining_never_negative(self, limiter: RateLimiter) -> None:
        """Should floor at zero when the window overshoots."""
        for _ in range(5):
            limiter.hit(KEY, 60)
        assert limiter.remaining(KEY, 3) == 0

    def test_clear_resets_key(self, limiter: RateLimiter) -> None:
        """Should forget the window for a key."""
        for _ in range(100):
            limiter.hit(KEY, 60)

        limiter.clear(KEY)

        assert limiter.attempts(KEY) == 0
        assert limiter.too_many_attempts(KEY, 100) is False
        assert limiter.available_in(KEY) == 0


class TestThreadSafety:
    """Tests for hits recorded from several threads."""

    def test_concurrent_hits_are_counted_exactly(self, limiter: RateLimiter) -> None:
        """Should hand out every count once and lose no hit."""
        threads, per_thread = 8, 250

        def record_hits() -> list[int]:
            return [limiter.hit(KEY, 60) for _ in range(per_thread)]

        with ThreadPoolExecutor(max_workers=threads) as pool:
            results = list(pool.map(lambda _: record_hits(), range(threads)))

        counts = sorted(count for batch in results for count in batch)
        assert counts == list(range(1, threads * per_thread + 1))
        assert limiter.attempts(KEY) == threads * per_thread
