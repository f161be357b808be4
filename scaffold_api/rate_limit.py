"""Sliding-window rate limiting per client."""

from collections import deque
from collections.abc import Callable
import threading
import time


class SlidingWindowRateLimiter:
    """Allows at most ``limit`` hits per key within any ``window_seconds`` span.

    Keys with no hit inside the window are dropped, so memory is bounded by
    the number of clients active in the last window.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        message: str = "Too many requests, please try again later.",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    @property
    def active_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def hit(self, key: str) -> float | None:
        """Record a hit for ``key``.

        Returns:
            None if the hit is allowed, otherwise seconds until the next hit
            would be allowed (the hit is not recorded).
        """
        now = self._clock()
        cutoff = now - self.window_seconds

        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            hits = self._hits.get(key)
            if hits is None:
                hits = self._hits[key] = deque()
            else:
                self._prune(hits, cutoff)

            if len(hits) >= self.limit:
                return hits[0] + self.window_seconds - now

            hits.append(now)
            return None

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    @staticmethod
    def _prune(hits: deque[float], cutoff: float) -> None:
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, cutoff: float) -> None:
        # Caller holds the lock.
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, cutoff)
            if not hits:
                del self._hits[key]
