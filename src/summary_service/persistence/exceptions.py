"""
Persistence exceptions.

StorageError is never retried automatically and is reported separately from
generation and validation failures.
"""

from summary_service.exceptions import SummaryServiceError
from summary_service.models.enums import ErrorCode


class StorageError(SummaryServiceError):
    """Raised when the durable store cannot be read or written."""

    error_code = ErrorCode.STORAGE_ERROR
