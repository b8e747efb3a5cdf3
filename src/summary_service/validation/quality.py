"""
Quality gates for generated summaries.

A gate judges one generated text. It raises OutputRejectedError on rejection
and returns None on acceptance.
"""

from typing import Protocol

import structlog

from summary_service.validation.exceptions import OutputRejectedError

logger = structlog.get_logger(__name__)


class QualityGate(Protocol):
    def check(self, text: str) -> None:
        ...


class MinLengthQualityGate:
    """
    Rejects summaries shorter than `min_length` characters after trimming.

    Catches the empty and truncated replies the model sometimes returns.
    """

    def __init__(self, min_length: int = 50):
        if min_length < 0:
            raise ValueError("min_length must be >= 0")
        self.min_length = min_length

    def check(self, text: str) -> None:
        length = len(text.strip())
        if length < self.min_length:
            logger.debug("Summary too short", length=length, min_length=self.min_length)
            raise OutputRejectedError("too_short", text, length=length)
