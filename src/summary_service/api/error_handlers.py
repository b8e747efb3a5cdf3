"""
FastAPI exception handlers and failure rendering.

Every failure leaves the service in the same shape:

    {"success": false, "errorCode": "...", "message": "...", "rawOutput"?: "..."}

with the HTTP status taken from STATUS_BY_CODE. Raw exception text never
reaches the body.
"""

import math

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from summary_service.exceptions import SummaryServiceError
from summary_service.models.enums import ErrorCode
from summary_service.models.output_models import SummaryFailureResponse

logger = structlog.get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.MISSING_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.TIMEOUT: status.HTTP_408_REQUEST_TIMEOUT,
    ErrorCode.SERVER_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.NETWORK_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INVALID_CREDENTIAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.FORBIDDEN: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def failure_response(failure: SummaryFailureResponse) -> JSONResponse:
    """
    Render a failure as JSON with its mapped status.

    RATE_LIMITED failures with a suggested wait get a Retry-After header
    (whole seconds, rounded up).
    """
    headers = {}
    if failure.error_code is ErrorCode.RATE_LIMITED and failure.retry_after_ms is not None:
        headers["Retry-After"] = str(max(1, math.ceil(failure.retry_after_ms / 1000)))

    return JSONResponse(
        status_code=STATUS_BY_CODE[failure.error_code],
        content=failure.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers or None,
    )


async def domain_error_handler(request: Request, exc: SummaryServiceError) -> JSONResponse:
    """
    Handle domain errors raised outside the pipeline (e.g. summary reads).

    Uses the exception's ErrorCode and its caller-safe message.
    """
    logger.warning(
        "Domain error",
        error_type=type(exc).__name__,
        error_code=exc.error_code.value,
        details=exc.details,
    )
    return failure_response(
        SummaryFailureResponse(error_code=exc.error_code, message=exc.message)
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle unparseable request bodies.

    Maps to MISSING_FIELD / 400 (the body could not supply the required fields).
    """
    logger.warning("Invalid request format", errors=exc.errors())
    return failure_response(
        SummaryFailureResponse(
            error_code=ErrorCode.MISSING_FIELD,
            message="Request body is malformed or missing required fields.",
        )
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to UNEXPECTED / 500 with a generic message.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return failure_response(
        SummaryFailureResponse(
            error_code=ErrorCode.UNEXPECTED,
            message="An unexpected error occurred.",
        )
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    SummaryServiceError: domain_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
