"""Fixed-window attempt counter shared by every upstream catalog call.

The limiter is best-effort: it never blocks and never raises. Callers ask
``too_many_attempts`` before doing work and record each attempt with ``hit``.
A window opens on the first hit for a key and closes ``decay_seconds`` later;
later hits inside the window do not extend it.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalog_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__)


@dataclass(slots=True)
class RateWindow:
    """Attempts recorded for one key and the instant the window resets."""

    attempts: int
    reset_at: float


class RateLimiter:
    """In-process fixed-window rate limiter.

    State lives in this instance only. Build one per process and share it
    between every component drawing on the same budget.

    Attributes:
        clock: Monotonic time source in seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._windows: dict[str, RateWindow] = {}
        self._lock = threading.Lock()

    def _live_window(self, key: str, now: float) -> RateWindow | None:
        # Caller holds self._lock
        window = self._windows.get(key)
        if window is None:
            return None
        if now >= window.reset_at:
            del self._windows[key]
            return None
        return window

    def too_many_attempts(self, key: str, max_attempts: int) -> bool:
        """Check whether ``key`` has used up its budget in the current window."""
        with self._lock:
            window = self._live_window(key, self.clock())
            return window is not None and window.attempts >= max_attempts

    def hit(self, key: str, decay_seconds: int = 60) -> int:
        """Record one attempt, opening a new window if none is live.

        Returns:
            The attempt count after this hit.
        """
        with self._lock:
            now = self.clock()
            window = self._live_window(key, now)
            if window is None:
                window = RateWindow(attempts=0, reset_at=now + decay_seconds)
                self._windows[key] = window
            window.attempts += 1
            return window.attempts

    def attempts(self, key: str) -> int:
        """Attempts recorded in the live window, 0 if none."""
        with self._lock:
            window = self._live_window(key, self.clock())
            return window.attempts if window else 0

    def remaining(self, key: str, max_attempts: int) -> int:
        """Attempts still allowed in the live window."""
        return max(0, max_attempts - self.attempts(key))

    def available_in(self, key: str) -> int:
        """Whole seconds until the live window resets, 0 if none."""
        with self._lock:
            now = self.clock()
            window = self._live_window(key, now)
            if window is None:
                return 0
            return max(0, math.ceil(window.reset_at - now))

    def clear(self, key: str) -> None:
        """Forget the window for ``key``."""
        with self._lock:
            self._windows.pop(key, None)
        logger.debug("Rate limit window cleared", key=key)
