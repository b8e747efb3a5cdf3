"""
Validation-specific exceptions.

Two families:
- InputError: the request itself is unusable (raised before any generation)
- OutputRejectedError / ValidationFailedError: generated text failed the
  quality gate, per attempt and at quality-budget exhaustion
"""

from typing import Optional

from summary_service.exceptions import SummaryServiceError
from summary_service.models.enums import ErrorCode


class InputError(SummaryServiceError):
    """Base exception for rejected requests."""


class MissingFieldError(InputError):
    """
    A required field is absent or blank.

    Raised before any external call is made.
    """

    error_code = ErrorCode.MISSING_FIELD

    def __init__(self, field_name: str):
        super().__init__(
            f"Missing required field: {field_name}",
            details={"field": field_name},
        )
        self.field_name = field_name


class ResourceNotFoundError(InputError):
    """The meeting does not exist."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, resource_id: str, message: str = "Meeting not found."):
        super().__init__(message, details={"resource_id": resource_id})
        self.resource_id = resource_id


class AccessDeniedError(InputError):
    """The meeting exists but is owned by someone else."""

    error_code = ErrorCode.ACCESS_DENIED

    def __init__(self, resource_id: str, requester_identity: str):
        super().__init__(
            "You do not have access to this meeting.",
            details={"resource_id": resource_id, "requester_identity": requester_identity},
        )
        self.resource_id = resource_id


class OutputRejectedError(SummaryServiceError):
    """
    One generated output failed the quality gate.

    Consumed by the output validator's quality loop; never reaches callers.
    """

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, reason: str, text: str, **details):
        super().__init__(
            f"Generated output rejected: {reason}",
            details={"reason": reason, "text_length": len(text), **details},
        )
        self.reason = reason
        self.text = text


class ValidationFailedError(SummaryServiceError):
    """
    Every generation within the quality budget was rejected.

    Attributes:
        raw_output: Text of the last rejected generation
        attempts: Generations judged
        reason: Why the last one was rejected
        transport_retries: Transport retries spent across all generations
    """

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        raw_output: str,
        attempts: int,
        reason: Optional[str] = None,
        transport_retries: int = 0,
    ):
        super().__init__(
            f"Generated summary failed quality validation after {attempts} attempt(s).",
            details={"attempts": attempts, "reason": reason},
        )
        self.raw_output = raw_output
        self.attempts = attempts
        self.reason = reason
        self.transport_retries = transport_retries
