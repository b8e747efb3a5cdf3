"""
Output data models for the Meeting Summary Service.

- GeneratedOutput: transient text between generation and the accept/reject decision
- PersistedSummary: the single durable row per meeting
- SummarySuccessResponse / SummaryFailureResponse: the invocation contract
  returned to callers (camelCase on the wire)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from summary_service.models.enums import ErrorCode


class GeneratedOutput(BaseModel):
    """Raw generated text and the quality gate's verdict on it."""

    model_config = ConfigDict(frozen=True)

    text: str
    accepted: bool = False


class PersistedSummary(BaseModel):
    """
    Durable summary row, uniquely keyed by resource_id.

    Written with upsert semantics: a later successful run for the same
    meeting replaces the row, it never adds a second one.
    """

    resource_id: str = Field(..., description="Owning meeting identifier (unique key)")
    summary_id: str = Field(..., description="Stable identifier derived from resource_id")
    text: str
    model_identifier: str
    prompt_version: str
    processing_duration_ms: int = Field(..., ge=0)
    retry_attempts: int = Field(..., ge=0, description="Transport retries spent")
    quality_attempts: int = Field(default=1, ge=1, description="Generations judged by the quality gate")
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class _ContractModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarySuccessResponse(_ContractModel):
    """Successful invocation. persisted_id is absent for dry runs."""

    success: bool = True
    text: str
    dry_run: bool
    processing_duration_ms: int = Field(..., ge=0)
    retry_attempts: int = Field(..., ge=0)
    persisted_id: Optional[str] = None


class SummaryFailureResponse(_ContractModel):
    """
    Failed invocation.

    Carries only a structured code and a human-readable message; raw_output is
    set for VALIDATION_FAILED only. retry_after_ms is the suggested wait for
    RATE_LIMITED and is rendered as a header rather than a body field.
    """

    success: bool = False
    error_code: ErrorCode
    message: str
    raw_output: Optional[str] = None
    retry_after_ms: Optional[int] = Field(default=None, exclude=True)
