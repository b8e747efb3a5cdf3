"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from summary_service.config import Settings
from summary_service.models.pipeline_version import PipelineVersion

# Long enough to pass the default 50-char quality gate
GOOD_SUMMARY = (
    "**Key Topics**: Q3 roadmap and hiring plan. "
    "**Action Items**: Dana drafts the budget by Friday."
)

TRANSCRIPT = (
    "Dana: Let's go over the Q3 roadmap. Sam: We need two more engineers. "
    "Dana: I'll draft the budget by Friday. Sam: Sounds good."
)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Retry delays are tiny so nothing in a test waits for real.
    """
    return Settings(
        # === Application ===
        APP_NAME="Meeting Summary Service (Test)",
        APP_VERSION="0.1.0",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Completion endpoint ===
        COMPLETION_BASE_URL="http://completion.test/v1",
        COMPLETION_API_KEY="test-key",
        COMPLETION_MODEL="gpt-4o-mini",

        # === Retry ===
        MAX_RETRIES=3,
        RETRY_BASE_DELAY_MS=1,
        RETRY_MAX_DELAY_MS=10,
        RETRY_JITTER_FRACTION=0.0,

        # === Redis ===
        REDIS_URL="redis://localhost:6379/0",
        REDIS_MAX_CONNECTIONS=10,

        # === Audit ===
        AUDIT_TO_REDIS=False,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def pipeline_version() -> PipelineVersion:
    return PipelineVersion(
        model_identifier="gpt-4o-mini",
        prompt_version="summarize-v1",
        service_version="0.1.0",
    )


@pytest.fixture
def good_summary() -> str:
    return GOOD_SUMMARY


@pytest.fixture
def transcript() -> str:
    return TRANSCRIPT
