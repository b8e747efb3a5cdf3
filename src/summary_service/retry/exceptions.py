"""
Retry engine exceptions.

GenerationFailedError is raised when the transport loop gives up: either the
budget is spent on retryable errors, or a terminal error occurred. The
classification of the last error is preserved so callers can tell
RATE_LIMITED from SERVER_ERROR from UNCLASSIFIED.
"""

from typing import Optional

from summary_service.exceptions import SummaryServiceError
from summary_service.llm.exceptions import CompletionError
from summary_service.models.enums import ErrorCode, ErrorKind


_MESSAGES = {
    ErrorKind.RATE_LIMITED: "The summarization service is receiving too many requests. Please wait and try again.",
    ErrorKind.INVALID_CREDENTIAL: "The summarization service is misconfigured (invalid credential).",
    ErrorKind.FORBIDDEN: "The summarization service refused the request.",
    ErrorKind.TIMEOUT: "The summarization service timed out.",
    ErrorKind.SERVER_ERROR: "The summarization service is temporarily unavailable. Please try again later.",
    ErrorKind.NETWORK_ERROR: "The summarization service could not be reached.",
    ErrorKind.UNCLASSIFIED: "The summarization service returned an unexpected error.",
}


class GenerationFailedError(SummaryServiceError):
    """
    Terminal transport failure.

    Attributes:
        kind: ErrorKind of the last failed attempt
        attempts: Attempts made before giving up
        retry_after_ms: Suggested wait before the caller tries again
        last_error: The final CompletionError
    """

    def __init__(
        self,
        last_error: CompletionError,
        attempts: int,
        retry_after_ms: Optional[int] = None,
    ):
        super().__init__(
            _MESSAGES[last_error.kind],
            details={
                "error_kind": last_error.kind.value,
                "attempts": attempts,
                "status_code": last_error.status_code,
            },
        )
        self.kind = last_error.kind
        self.attempts = attempts
        self.retry_after_ms = retry_after_ms
        self.last_error = last_error

    @property
    def error_code(self) -> ErrorCode:  # type: ignore[override]
        return ErrorCode.from_error_kind(self.kind)
