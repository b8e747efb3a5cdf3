"""
Retry state for one transport loop.

RetryState is mutable and lives for a single `complete_with_retry` call;
nothing about it is shared between invocations.
"""

from dataclasses import dataclass, field
from typing import Optional

from summary_service.models.enums import ErrorKind


@dataclass
class RetryState:
    """
    Progress of one transport retry loop.

    Attributes:
        attempt_count: Attempts made so far
        last_error_kind: Classification of the most recent failure
        next_delay_ms: Wait scheduled before the next attempt
        error_history: ErrorKind of every failed attempt, in order
    """

    attempt_count: int = 0
    last_error_kind: Optional[ErrorKind] = None
    next_delay_ms: Optional[int] = None
    error_history: list[ErrorKind] = field(default_factory=list)

    @property
    def retries(self) -> int:
        """Attempts beyond the first."""
        return max(0, self.attempt_count - 1)

    def record_failure(self, kind: ErrorKind) -> None:
        self.last_error_kind = kind
        self.error_history.append(kind)
