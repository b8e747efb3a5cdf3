"""
Unit tests for API dependency injection.
"""

from unittest.mock import MagicMock, patch

import pytest

from summary_service.api.dependencies import (
    get_audit_logger,
    get_completion_client,
    get_pipeline,
    get_pipeline_version,
    get_prompt_builder,
    get_requester_identity,
    get_settings,
)
from summary_service.audit.observers import RedisAuditObserver, StructlogAuditObserver
from summary_service.config import Settings
from summary_service.llm.base_client import BaseCompletionClient
from summary_service.llm.prompt_builder import PromptBuilder
from summary_service.pipeline import SummarizationPipeline
from tests.unit.fakes import ScriptedCompletionClient


def test_get_settings():
    """Test settings singleton."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
    assert isinstance(settings1, Settings)


def test_get_completion_client():
    """Test completion client singleton."""
    client1 = get_completion_client()
    client2 = get_completion_client()

    assert client1 is client2
    assert isinstance(client1, BaseCompletionClient)


def test_get_prompt_builder():
    """Test prompt builder singleton."""
    builder1 = get_prompt_builder()
    builder2 = get_prompt_builder()

    assert builder1 is builder2
    assert isinstance(builder1, PromptBuilder)


def test_audit_logger_observers(test_settings):
    get_audit_logger.cache_clear()
    try:
        with patch("summary_service.api.dependencies.get_settings", return_value=test_settings):
            audit = get_audit_logger()
        assert [type(o) for o in audit.observers] == [StructlogAuditObserver]
        assert audit.sample_chars == test_settings.AUDIT_SAMPLE_CHARS

        get_audit_logger.cache_clear()
        test_settings.AUDIT_TO_REDIS = True
        with patch("summary_service.api.dependencies.get_settings", return_value=test_settings), \
                patch("summary_service.api.dependencies.get_async_redis_client", return_value=MagicMock()):
            audit = get_audit_logger()
        assert [type(o) for o in audit.observers] == [StructlogAuditObserver, RedisAuditObserver]
    finally:
        get_audit_logger.cache_clear()


def test_get_pipeline(test_settings, pipeline_version):
    pipeline = get_pipeline(
        client=ScriptedCompletionClient([]),
        prompt_builder=PromptBuilder(),
        repository=MagicMock(),
        request_validator=MagicMock(),
        audit=MagicMock(),
        version=pipeline_version,
        settings=test_settings,
    )

    assert isinstance(pipeline, SummarizationPipeline)
    assert pipeline.output_validator.max_attempts == test_settings.QUALITY_MAX_ATTEMPTS
    assert pipeline.output_validator.gate.min_length == test_settings.MIN_SUMMARY_LENGTH
    assert pipeline.output_validator.retry_engine.max_retries == test_settings.MAX_RETRIES
    assert pipeline.timeout_seconds == test_settings.PIPELINE_TIMEOUT_SECONDS


def test_get_pipeline_version(test_settings):
    version = get_pipeline_version(test_settings)

    assert version.model_identifier == test_settings.COMPLETION_MODEL
    assert version.prompt_version == test_settings.PROMPT_VERSION


@pytest.mark.parametrize("header", ["user-a", None])
def test_get_requester_identity(header):
    assert get_requester_identity(header) == header


def test_settings_fields_are_all_consumed():
    assert "DEBUG" not in Settings.model_fields
