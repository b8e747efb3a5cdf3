"""
Base exception for the Meeting Summary Service.

Every domain failure carries an ErrorCode so the response renderer can map it
to the caller-facing contract without inspecting message text.
"""

from typing import Any

from summary_service.models.enums import ErrorCode


class SummaryServiceError(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        message: Human-readable description (safe to show to callers)
        details: Structured data for logging only
    """

    error_code: ErrorCode = ErrorCode.UNEXPECTED

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message
