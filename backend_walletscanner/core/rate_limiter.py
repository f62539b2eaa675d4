"""
Sliding-window rate limiter for outbound provider calls.

Keeps the timestamps of recent requests in a deque pruned to the rolling
window. acquire() sleeps until a slot frees up; callers never get an error.
One process-wide instance (get_rate_limiter) is shared by every Helius/RPC
call, so the lock makes it safe under FastAPI's threadpool.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from backend_walletscanner.scanner_logging import get_logger

logger = get_logger(__name__)


class SlidingWindowRateLimiter:
    """At most max_requests per rolling window_sec, on a monotonic clock."""

    def __init__(
        self,
        max_requests: int,
        window_sec: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_sec <= 0:
            raise ValueError("window_sec must be positive")
        self._max = max_requests
        self._window = window_sec
        self._clock = clock
        self._sleep = sleep
        self._times: deque[float] = deque()
        self._lock = threading.Lock()

    @property
    def max_requests(self) -> int:
        return self._max

    @property
    def window_sec(self) -> float:
        return self._window

    def _prune(self, now: float) -> None:
        cutoff = now - self._window
        while self._times and self._times[0] <= cutoff:
            self._times.popleft()

    def try_acquire(self) -> bool:
        """Take a slot if one is free right now."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            if len(self._times) >= self._max:
                return False
            self._times.append(now)
            return True

    def acquire(self) -> None:
        """Block until a slot is free, then take it."""
        while True:
            with self._lock:
                now = self._clock()
                self._prune(now)
                if len(self._times) < self._max:
                    self._times.append(now)
                    return
                wait = self._times[0] + self._window - now
            logger.debug("rate_limiter_wait", wait_sec=round(wait, 4))
            self._sleep(max(wait, 0.0))

    def reset(self) -> None:
        with self._lock:
            self._times.clear()


_shared: SlidingWindowRateLimiter | None = None
_shared_lock = threading.Lock()


def get_rate_limiter() -> SlidingWindowRateLimiter:
    """Process-wide limiter built from settings on first use."""
    global _shared
    with _shared_lock:
        if _shared is None:
            from backend_walletscanner.config import get_settings

            settings = get_settings()
            _shared = SlidingWindowRateLimiter(
                settings.rate_limit_requests,
                settings.rate_limit_window_sec,
            )
        return _shared


def reset_rate_limiter_for_test() -> None:
    global _shared
    with _shared_lock:
        _shared = None
