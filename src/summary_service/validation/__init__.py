"""
Request and output validation.

- request_validator: required fields, meeting existence, meeting ownership
- quality: QualityGate protocol and the minimum-length gate
- output_validator: quality-gated generation loop with its own budget
- exceptions: InputError family, OutputRejectedError, ValidationFailedError
"""

from summary_service.validation.exceptions import (
    AccessDeniedError,
    InputError,
    MissingFieldError,
    OutputRejectedError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from summary_service.validation.output_validator import (
    OutputValidator,
    ValidatedGeneration,
)
from summary_service.validation.quality import MinLengthQualityGate, QualityGate
from summary_service.validation.request_validator import RequestValidator

__all__ = [
    "AccessDeniedError",
    "InputError",
    "MinLengthQualityGate",
    "MissingFieldError",
    "OutputRejectedError",
    "OutputValidator",
    "QualityGate",
    "RequestValidator",
    "ResourceNotFoundError",
    "ValidatedGeneration",
    "ValidationFailedError",
]
