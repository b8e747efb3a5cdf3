"""
Unit tests for API request/response models and the invocation contract.
"""

from datetime import datetime

from summary_service.api.models import HealthResponse, SummarizeBody
from summary_service.models.enums import ErrorCode
from summary_service.models.output_models import SummaryFailureResponse, SummarySuccessResponse


def test_summarize_body_camel_case():
    body = SummarizeBody.model_validate(
        {"resourceId": "meeting-1", "content": "hello", "dryRun": True}
    )

    assert body.resource_id == "meeting-1"
    assert body.content == "hello"
    assert body.dry_run is True


def test_summarize_body_snake_case_accepted():
    body = SummarizeBody.model_validate({"resource_id": "meeting-1", "content": "hello"})

    assert body.resource_id == "meeting-1"
    assert body.dry_run is False


def test_summarize_body_fields_optional():
    body = SummarizeBody.model_validate({})

    assert body.resource_id is None
    assert body.content is None


def test_success_response_serializes_camel_case():
    response = SummarySuccessResponse(
        text="summary", dry_run=False, processing_duration_ms=5, retry_attempts=1, persisted_id="sid"
    )

    assert response.model_dump(by_alias=True) == {
        "success": True,
        "text": "summary",
        "dryRun": False,
        "processingDurationMs": 5,
        "retryAttempts": 1,
        "persistedId": "sid",
    }


def test_failure_response_hides_retry_after():
    response = SummaryFailureResponse(
        error_code=ErrorCode.RATE_LIMITED, message="slow down", retry_after_ms=2000
    )

    body = response.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert body == {"success": False, "errorCode": "RATE_LIMITED", "message": "slow down"}
    assert response.retry_after_ms == 2000


def test_health_response_model():
    response = HealthResponse(
        status="healthy",
        services={"completion": "healthy", "redis": "healthy"},
        version="0.1.0",
    )

    assert response.status == "healthy"
    assert isinstance(response.timestamp, datetime)
