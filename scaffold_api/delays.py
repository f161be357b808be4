"""Simulated generation delay.

The delay only shapes perceived latency; it carries no functional meaning.
"""

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Awaitable, Callable

ProgressCallback = Callable[[int], Awaitable[None] | None]

FEATURE_WEIGHTS: dict[str, int] = {
    "auth": 2,
    "crud": 2,
    "payments": 3,
    "database": 2,
    "api": 1,
}


def complexity_score(features) -> int:
    """1 + weighted sum of enabled feature flags."""
    return 1 + sum(weight for name, weight in FEATURE_WEIGHTS.items() if getattr(features, name))


class DelayStrategy(ABC):
    """How long a generation run pretends to work."""

    @abstractmethod
    def duration(self, complexity: int) -> float:
        """Total delay in seconds for a complexity score."""

    @abstractmethod
    async def wait(self, complexity: int, on_progress: ProgressCallback | None = None) -> None:
        """Sleep for the delay, reporting percent progress along the way."""


class SimulatedDelay(DelayStrategy):
    """Sleeps ``base + complexity * per_point`` seconds, clamped, in equal steps."""

    def __init__(
        self,
        base: float = 5.0,
        per_point: float = 0.5,
        minimum: float = 0.0,
        maximum: float = 15.0,
        steps: int = 5,
    ):
        if steps < 1:
            raise ValueError("steps must be >= 1")
        if minimum > maximum:
            raise ValueError("minimum must not exceed maximum")
        self.base = base
        self.per_point = per_point
        self.minimum = minimum
        self.maximum = maximum
        self.steps = steps

    def duration(self, complexity: int) -> float:
        raw = self.base + complexity * self.per_point
        return min(max(raw, self.minimum), self.maximum)

    async def wait(self, complexity: int, on_progress: ProgressCallback | None = None) -> None:
        step = self.duration(complexity) / self.steps
        for i in range(1, self.steps + 1):
            await asyncio.sleep(step)
            if on_progress is not None:
                result = on_progress(i * 100 // self.steps)
                if asyncio.iscoroutine(result):
                    await result


class NoDelay(DelayStrategy):
    """Zero delay, for tests and local rendering."""

    def duration(self, complexity: int) -> float:
        return 0.0

    async def wait(self, complexity: int, on_progress: ProgressCallback | None = None) -> None:
        # Still yield so the caller's acknowledgment goes out first.
        await asyncio.sleep(0)
