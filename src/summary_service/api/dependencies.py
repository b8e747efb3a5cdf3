"""
FastAPI dependency injection for the Meeting Summary Service.

Expensive resources (completion client, prompt templates, Redis pool, audit
logger) are process-wide singletons; the pipeline itself is cheap and is
assembled per request from them.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, Header

from summary_service import __version__
from summary_service.audit.logger import AuditLogger
from summary_service.audit.observers import RedisAuditObserver, StructlogAuditObserver
from summary_service.config import Settings, settings
from summary_service.llm.base_client import BaseCompletionClient
from summary_service.llm.openai_client import OpenAICompletionClient
from summary_service.llm.prompt_builder import PromptBuilder
from summary_service.models.pipeline_version import PipelineVersion
from summary_service.persistence.directory import RedisResourceDirectory
from summary_service.persistence.redis_client import get_async_redis_client
from summary_service.persistence.repository import SummaryRepository
from summary_service.pipeline import SummarizationPipeline
from summary_service.retry.engine import TransportRetryEngine
from summary_service.validation.output_validator import OutputValidator
from summary_service.validation.quality import MinLengthQualityGate
from summary_service.validation.request_validator import RequestValidator

REQUESTER_HEADER = "X-Requester-Id"


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return settings


@lru_cache()
def get_completion_client() -> BaseCompletionClient:
    """
    Get singleton completion client.

    The client keeps an internal connection pool; closed on shutdown.
    """
    s = get_settings()
    return OpenAICompletionClient(
        base_url=s.COMPLETION_BASE_URL,
        api_key=s.COMPLETION_API_KEY,
        timeout=s.COMPLETION_TIMEOUT,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """Get singleton prompt builder (templates are loaded once)."""
    s = get_settings()
    return PromptBuilder(
        templates_dir=Path(s.PROMPT_TEMPLATES_DIR) if s.PROMPT_TEMPLATES_DIR else None,
        prompt_version=s.PROMPT_VERSION,
        content_truncation_limit=s.CONTENT_TRUNCATION_LIMIT,
        default_model=s.COMPLETION_MODEL,
        default_temperature=s.COMPLETION_TEMPERATURE,
        default_max_tokens=s.COMPLETION_MAX_TOKENS,
    )


@lru_cache()
def get_audit_logger() -> AuditLogger:
    """
    Get singleton audit logger.

    Always logs through structlog; also keeps a capped Redis list when
    AUDIT_TO_REDIS is set.
    """
    s = get_settings()
    observers = [StructlogAuditObserver()]
    if s.AUDIT_TO_REDIS:
        observers.append(
            RedisAuditObserver(
                get_async_redis_client(s),
                key=s.AUDIT_LOG_KEY,
                max_entries=s.AUDIT_LOG_MAX_ENTRIES,
            )
        )
    return AuditLogger(observers, sample_chars=s.AUDIT_SAMPLE_CHARS)


def get_pipeline_version(settings: Settings = Depends(get_settings)) -> PipelineVersion:
    return PipelineVersion(
        model_identifier=settings.COMPLETION_MODEL,
        prompt_version=settings.PROMPT_VERSION,
        service_version=__version__,
    )


def get_repository(settings: Settings = Depends(get_settings)) -> SummaryRepository:
    """Create summary repository on the shared async Redis pool."""
    return SummaryRepository(get_async_redis_client(settings))


def get_request_validator(settings: Settings = Depends(get_settings)) -> RequestValidator:
    """Create request validator backed by the Redis ownership directory."""
    return RequestValidator(RedisResourceDirectory(get_async_redis_client(settings)))


def get_pipeline(
    client: BaseCompletionClient = Depends(get_completion_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    repository: SummaryRepository = Depends(get_repository),
    request_validator: RequestValidator = Depends(get_request_validator),
    audit: AuditLogger = Depends(get_audit_logger),
    version: PipelineVersion = Depends(get_pipeline_version),
    settings: Settings = Depends(get_settings),
) -> SummarizationPipeline:
    """
    Assemble the summarization pipeline.

    Note: not cached. Every piece it holds is either a singleton or a thin
    wrapper around the shared Redis pool.
    """
    retry_engine = TransportRetryEngine.from_settings(client, settings)
    output_validator = OutputValidator(
        retry_engine,
        gate=MinLengthQualityGate(settings.MIN_SUMMARY_LENGTH),
        max_attempts=settings.QUALITY_MAX_ATTEMPTS,
    )
    return SummarizationPipeline(
        request_validator=request_validator,
        output_validator=output_validator,
        prompt_builder=prompt_builder,
        repository=repository,
        audit=audit,
        version=version,
        timeout_seconds=settings.PIPELINE_TIMEOUT_SECONDS,
    )


def get_requester_identity(
    x_requester_id: Optional[str] = Header(default=None, alias=REQUESTER_HEADER),
) -> Optional[str]:
    """
    Caller identity as forwarded by the authenticating gateway.

    Left as None when absent; the request validator turns that into
    MISSING_FIELD.
    """
    return x_requester_id
