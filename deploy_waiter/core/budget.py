"""Wall-clock allowance shared by the search and polling phases."""

import time
from dataclasses import dataclass, field
from typing import Callable

Clock = Callable[[], float]


@dataclass(frozen=True)
class TimeBudget:
    """A fixed start instant plus the total number of seconds allowed."""

    started_at: float
    total_seconds: float
    clock: Clock = field(default=time.monotonic, repr=False, compare=False)

    @classmethod
    def start(cls, total_seconds: float, clock: Clock = time.monotonic) -> "TimeBudget":
        """Start a budget now."""
        return cls(started_at=clock(), total_seconds=total_seconds, clock=clock)

    def elapsed(self) -> float:
        return self.clock() - self.started_at

    def remaining(self) -> bool:
        """Whether any of the allowance is left."""
        return self.elapsed() < self.total_seconds
