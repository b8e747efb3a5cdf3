"""
Transport loop outcome.

TransportOutcome pairs the successful completion with the retry history that
produced it, so callers can report transport retries separately from quality
retries.
"""

from dataclasses import dataclass, field

from summary_service.models.enums import ErrorKind
from summary_service.models.llm_models import CompletionResponse


@dataclass(frozen=True)
class TransportOutcome:
    """
    Result of a successful transport loop.

    Attributes:
        response: The completion that finally succeeded
        attempts: Attempts made, including the successful one
        error_history: Kinds of the failed attempts that preceded success
    """

    response: CompletionResponse
    attempts: int
    error_history: list[ErrorKind] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")

    @property
    def retries(self) -> int:
        return self.attempts - 1
