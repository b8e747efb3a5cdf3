"""
API-specific request and response models for FastAPI endpoints.

The request body is deliberately permissive (every field optional) so that
missing fields reach the request validator and come back as MISSING_FIELD in
the failure contract instead of FastAPI's default 422 body.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SummarizeBody(BaseModel):
    """Body of POST /summaries (camelCase; snake_case also accepted)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resource_id: Optional[str] = Field(default=None, description="Meeting identifier")
    content: Optional[str] = Field(default=None, description="Meeting transcript")
    dry_run: bool = Field(default=False, description="Generate without saving")


class StoredSummaryResponse(BaseModel):
    """Body of GET /summaries/{resource_id}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resource_id: str
    summary_id: str
    text: str
    model_identifier: str
    prompt_version: str
    processing_duration_ms: int
    retry_attempts: int
    updated_at: datetime


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall service status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    services: dict[str, str] = Field(
        description="Status of individual dependencies",
        examples=[{"completion": "healthy", "redis": "healthy"}]
    )
    version: str = Field(
        description="Service version"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )
