"""
Audit event model.

One event per dry-run completion or terminal failure. Events hold a sample of
the transcript, never the whole of it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from summary_service.models.enums import AuditEventType, ErrorCode


class AuditEvent(BaseModel):
    event_type: AuditEventType
    resource_id: str
    input_sample: str = Field(default="", description="First AUDIT_SAMPLE_CHARS chars of the transcript")
    prompt_version: str
    model_identifier: str
    error_code: Optional[ErrorCode] = None
    output: Optional[str] = Field(default=None, description="Generated or rejected text, when there is one")
    attempts: Optional[int] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
