"""
Integration tests for the FastAPI application.

These tests use TestClient to exercise the full HTTP surface without running
services: the completion endpoint, Redis and the ownership directory are
replaced through dependency overrides.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from summary_service.api.dependencies import (
    get_completion_client,
    get_pipeline,
    get_repository,
    get_request_validator,
)
from summary_service.audit.logger import AuditLogger
from summary_service.llm.prompt_builder import PromptBuilder
from summary_service.main import app
from summary_service.models.enums import ErrorKind
from summary_service.persistence.repository import SummaryRepository, summary_id_for
from summary_service.pipeline import SummarizationPipeline
from summary_service.retry.backoff import BackoffPolicy
from summary_service.retry.engine import TransportRetryEngine
from summary_service.validation.output_validator import OutputValidator
from summary_service.validation.quality import MinLengthQualityGate
from summary_service.validation.request_validator import RequestValidator
from tests.unit.fakes import (
    FakeAsyncRedis,
    ScriptedCompletionClient,
    SleepRecorder,
    StaticDirectory,
    completion_error,
)

GOOD = "Key Topics: budget, hiring. Action Items: Dana drafts the budget by Friday."
HEADERS = {"X-Requester-Id": "user-a"}

client = TestClient(app)


@pytest.fixture
def store():
    return FakeAsyncRedis()


@pytest.fixture
def wire(store, pipeline_version):
    """Install overrides backed by a scripted completion client."""

    def install(script):
        completion = ScriptedCompletionClient(script)
        directory = StaticDirectory({"meeting-1": "user-a"})
        sleep = SleepRecorder()
        engine = TransportRetryEngine(
            completion, backoff=BackoffPolicy(jitter_fraction=0.0), max_retries=3, sleep=sleep
        )
        pipeline = SummarizationPipeline(
            request_validator=RequestValidator(directory),
            output_validator=OutputValidator(
                engine, gate=MinLengthQualityGate(50), max_attempts=2, sleep=sleep
            ),
            prompt_builder=PromptBuilder(),
            repository=SummaryRepository(store),
            audit=AuditLogger([]),
            version=pipeline_version,
        )
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        app.dependency_overrides[get_request_validator] = lambda: RequestValidator(directory)
        app.dependency_overrides[get_repository] = lambda: SummaryRepository(store)
        app.dependency_overrides[get_completion_client] = lambda: completion
        return completion

    yield install
    app.dependency_overrides.clear()


def test_root_endpoint():
    """Test root endpoint returns service info."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "0.1.0"
    assert "docs" in data
    assert "health" in data


def test_create_summary_persists(wire, store):
    wire([GOOD])

    response = client.post(
        "/summaries", json={"resourceId": "meeting-1", "content": "Dana: budget by Friday."}, headers=HEADERS
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["text"] == GOOD
    assert data["dryRun"] is False
    assert data["retryAttempts"] == 0
    assert data["persistedId"] == summary_id_for("meeting-1")
    assert "processingDurationMs" in data
    assert list(store.strings) == ["summary:meeting-1"]
    assert response.headers["X-Request-ID"]


def test_dry_run_not_persisted(wire, store):
    wire([GOOD])

    response = client.post(
        "/summaries",
        json={"resourceId": "meeting-1", "content": "Dana: budget by Friday.", "dryRun": True},
        headers=HEADERS,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["dryRun"] is True
    assert "persistedId" not in data
    assert store.strings == {}


def test_retry_attempts_reported(wire):
    wire([completion_error(ErrorKind.SERVER_ERROR), GOOD])

    response = client.post(
        "/summaries", json={"resourceId": "meeting-1", "content": "Dana: budget."}, headers=HEADERS
    )

    assert response.status_code == 200
    assert response.json()["retryAttempts"] == 1


def test_empty_content_is_missing_field(wire):
    completion = wire([GOOD])

    response = client.post("/summaries", json={"resourceId": "meeting-1", "content": ""}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "errorCode": "MISSING_FIELD",
        "message": "Missing required field: content",
    }
    assert completion.calls == 0


def test_missing_requester_header(wire):
    wire([GOOD])

    response = client.post("/summaries", json={"resourceId": "meeting-1", "content": "text"})

    assert response.status_code == 400
    assert response.json()["errorCode"] == "MISSING_FIELD"


def test_malformed_body_is_missing_field(wire):
    wire([GOOD])

    response = client.post(
        "/summaries",
        content=b"{not json",
        headers={**HEADERS, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "MISSING_FIELD"


@pytest.mark.parametrize(
    "resource_id, requester, status_code, code",
    [
        ("meeting-404", "user-a", 404, "NOT_FOUND"),
        ("meeting-1", "user-b", 403, "ACCESS_DENIED"),
    ],
)
def test_not_found_vs_access_denied(wire, resource_id, requester, status_code, code):
    wire([GOOD])

    response = client.post(
        "/summaries",
        json={"resourceId": resource_id, "content": "text"},
        headers={"X-Requester-Id": requester},
    )

    assert response.status_code == status_code
    assert response.json()["errorCode"] == code


def test_validation_failed_returns_raw_output(wire):
    wire(["ten chars!", "2nd short!"])

    response = client.post(
        "/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS
    )

    assert response.status_code == 422
    data = response.json()
    assert data["errorCode"] == "VALIDATION_FAILED"
    assert data["rawOutput"] == "2nd short!"


def test_rate_limited_sets_retry_after(wire):
    wire([completion_error(ErrorKind.RATE_LIMITED, retry_after_ms=4000)] * 3)

    response = client.post(
        "/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS
    )

    assert response.status_code == 429
    assert response.json()["errorCode"] == "RATE_LIMITED"
    assert response.headers["Retry-After"] == "4"


def test_server_error_maps_to_503(wire):
    wire([completion_error(ErrorKind.SERVER_ERROR)] * 3)

    response = client.post(
        "/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS
    )

    assert response.status_code == 503
    assert response.json()["errorCode"] == "SERVER_ERROR"
    assert "Retry-After" not in response.headers


def test_read_saved_summary(wire):
    wire([GOOD])
    client.post("/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS)

    response = client.get("/summaries/meeting-1", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["text"] == GOOD
    assert data["summaryId"] == summary_id_for("meeting-1")
    assert data["promptVersion"] == "summarize-v1"


def test_read_without_summary_is_not_found(wire):
    wire([])

    response = client.get("/summaries/meeting-1", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NOT_FOUND"


def test_read_foreign_summary_denied(wire):
    wire([])

    response = client.get("/summaries/meeting-1", headers={"X-Requester-Id": "user-b"})

    assert response.status_code == 403
    assert response.json()["errorCode"] == "ACCESS_DENIED"


def test_delete_saved_summary(wire, store):
    wire([GOOD])
    client.post("/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS)

    response = client.delete("/summaries/meeting-1", headers=HEADERS)

    assert response.status_code == 204
    assert store.strings == {}
    assert client.get("/summaries/meeting-1", headers=HEADERS).status_code == 404


def test_delete_without_summary_is_not_found(wire):
    wire([])

    response = client.delete("/summaries/meeting-1", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NOT_FOUND"


def test_delete_foreign_summary_denied(wire, store):
    wire([GOOD])
    client.post("/summaries", json={"resourceId": "meeting-1", "content": "text"}, headers=HEADERS)

    response = client.delete("/summaries/meeting-1", headers={"X-Requester-Id": "user-b"})

    assert response.status_code == 403
    assert list(store.strings) == ["summary:meeting-1"]


def test_health_endpoint(wire):
    wire([])

    with patch("summary_service.api.routes.get_async_redis_client", return_value=FakeAsyncRedis()):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"] == {"completion": "healthy", "redis": "healthy"}
