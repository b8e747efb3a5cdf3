"""
Exponential backoff with jitter.

    delay(n) = min(max_delay, base * multiplier^(n-1)) * (1 + jitter * U[0, 1))

where n is the number of the attempt that just failed (1-indexed). Jitter
spreads independent callers apart so they do not retry in lockstep.
"""

import random
from dataclasses import dataclass, field
from typing import Callable

from summary_service.config import Settings


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Backoff parameters shared by the transport and quality retry loops.

    Attributes:
        base_delay_ms: Delay after the first failed attempt, before jitter
        multiplier: Growth factor per attempt
        max_delay_ms: Cap applied before jitter
        jitter_fraction: Upper bound of the random extra, as a fraction
        rng: Source of U[0, 1) samples (injectable for tests)
    """

    base_delay_ms: int = 1000
    multiplier: float = 2.0
    max_delay_ms: int = 60000
    jitter_fraction: float = 0.1
    rng: Callable[[], float] = field(default=random.random, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")
        if not 0 <= self.jitter_fraction <= 1:
            raise ValueError("jitter_fraction must be within [0, 1]")

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackoffPolicy":
        return cls(
            base_delay_ms=settings.RETRY_BASE_DELAY_MS,
            multiplier=settings.RETRY_BACKOFF_MULTIPLIER,
            max_delay_ms=settings.RETRY_MAX_DELAY_MS,
            jitter_fraction=settings.RETRY_JITTER_FRACTION,
        )

    def base_delay_for(self, attempt: int) -> float:
        """Capped exponential delay for `attempt`, without jitter."""
        if attempt < 1:
            raise ValueError("attempt must be >= 1")
        return min(float(self.max_delay_ms), self.base_delay_ms * self.multiplier ** (attempt - 1))

    def compute_delay_ms(self, attempt: int) -> int:
        """Delay to wait after `attempt` failed, jitter included."""
        return int(self.base_delay_for(attempt) * (1 + self.jitter_fraction * self.rng()))
