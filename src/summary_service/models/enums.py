"""
Enumerations for the Meeting Summary Service.

All enums are closed taxonomies - downstream code switches on these values
and never re-parses error text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Classification of a failed call to the completion endpoint.

    Assigned exactly once, at the transport boundary (the completion client).
    The retry engine decides retry/terminal from this value alone.
    """

    RATE_LIMITED = "rate_limited"
    INVALID_CREDENTIAL = "invalid_credential"
    FORBIDDEN = "forbidden"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    UNCLASSIFIED = "unclassified"

    @property
    def retryable(self) -> bool:
        """Whether another attempt may succeed."""
        return self in _RETRYABLE_KINDS


_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.RATE_LIMITED,
        ErrorKind.TIMEOUT,
        ErrorKind.SERVER_ERROR,
        ErrorKind.NETWORK_ERROR,
    }
)


class ErrorCode(str, Enum):
    """
    Error codes exposed to callers in the failure response.

    One code per distinguishable failure; generation failures keep the
    ErrorKind of the last attempt rather than collapsing into one code.
    """

    MISSING_FIELD = "MISSING_FIELD"
    NOT_FOUND = "NOT_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    FORBIDDEN = "FORBIDDEN"
    TIMEOUT = "TIMEOUT"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"
    UNEXPECTED = "UNEXPECTED"

    @classmethod
    def from_error_kind(cls, kind: ErrorKind) -> "ErrorCode":
        """Map a transport ErrorKind to its caller-facing code."""
        return _KIND_TO_CODE[kind]


_KIND_TO_CODE = {
    ErrorKind.RATE_LIMITED: ErrorCode.RATE_LIMITED,
    ErrorKind.INVALID_CREDENTIAL: ErrorCode.INVALID_CREDENTIAL,
    ErrorKind.FORBIDDEN: ErrorCode.FORBIDDEN,
    ErrorKind.TIMEOUT: ErrorCode.TIMEOUT,
    ErrorKind.SERVER_ERROR: ErrorCode.SERVER_ERROR,
    ErrorKind.NETWORK_ERROR: ErrorCode.NETWORK_ERROR,
    ErrorKind.UNCLASSIFIED: ErrorCode.UNEXPECTED,
}


class PipelineState(str, Enum):
    """
    States of one summarization invocation.

    Validating -> Generating -> ValidatingOutput (may loop back to Generating)
    -> DryRunComplete | Persisting -> Persisted | PersistFailed.
    """

    VALIDATING = "validating"
    GENERATING = "generating"
    VALIDATING_OUTPUT = "validating_output"
    PERSISTING = "persisting"

    # Terminal: success
    DRY_RUN_COMPLETE = "dry_run_complete"
    PERSISTED = "persisted"

    # Terminal: failure
    INPUT_REJECTED = "input_rejected"
    GENERATION_FAILED = "generation_failed"
    OUTPUT_REJECTED = "output_rejected"
    PERSIST_FAILED = "persist_failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            PipelineState.DRY_RUN_COMPLETE,
            PipelineState.PERSISTED,
            PipelineState.INPUT_REJECTED,
            PipelineState.GENERATION_FAILED,
            PipelineState.OUTPUT_REJECTED,
            PipelineState.PERSIST_FAILED,
        )


class AuditEventType(str, Enum):
    """Events recorded by the audit logger."""

    DRY_RUN_COMPLETED = "dry_run"
    VALIDATION_EXHAUSTED = "validation_exhausted"
    TRANSPORT_EXHAUSTED = "transport_exhausted"
    PERSIST_FAILED = "persist_failed"
