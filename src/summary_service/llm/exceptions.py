"""
Exceptions for the completion client layer.

The completion client raises exactly one exception type, classified once
into an ErrorKind at the transport boundary. The retry engine switches on
`kind` and never parses the message.
"""

from typing import Any, Optional

from summary_service.exceptions import SummaryServiceError
from summary_service.models.enums import ErrorCode, ErrorKind


class CompletionError(SummaryServiceError):
    """
    A single failed attempt against the completion endpoint.

    Attributes:
        kind: Closed classification of the failure
        retry_after_ms: Server-supplied wait before the next attempt, if any
        status_code: HTTP status when the server answered
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        retry_after_ms: Optional[int] = None,
        status_code: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.kind = kind
        self.retry_after_ms = retry_after_ms
        self.status_code = status_code

    @property
    def error_code(self) -> ErrorCode:  # type: ignore[override]
        return ErrorCode.from_error_kind(self.kind)

    @property
    def retryable(self) -> bool:
        return self.kind.retryable
