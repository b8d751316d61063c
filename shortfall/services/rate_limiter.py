"""
Fixed-window request limiter.

Each key (usually a client IP) gets max_requests per window. The clock is
injectable so tests can move time forward.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Counts requests per key within a fixed time window."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be positive, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def is_limited(self, key: str) -> bool:
        """
        Record a request for key and report whether it is over the limit.

        The first request after a window expires opens a new window. Opening
        a window also drops every other expired one, so idle keys do not pile up.
        """
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now > window.reset_at:
            self._drop_expired(now)
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return False

        window.count += 1
        if window.count > self.max_requests:
            logger.info("rate_limited", extra={"key": key, "count": window.count})
            return True
        return False

    def _drop_expired(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]

    def tracked_keys(self) -> int:
        """Number of keys with a tracked window."""
        return len(self._windows)

    def reset(self) -> None:
        """Forget every window."""
        self._windows.clear()
