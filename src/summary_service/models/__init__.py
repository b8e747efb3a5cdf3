"""
Pydantic data models for the Meeting Summary Service.

Includes:
- Enums (ErrorKind, ErrorCode, PipelineState, AuditEventType)
- Input models (GenerationRequest)
- Output models (GeneratedOutput, PersistedSummary, success/failure responses)
- PipelineVersion (frozen dataclass for audit tagging)
- Completion models (ChatMessage, CompletionRequest, CompletionResponse)
"""

from summary_service.models.enums import (
    AuditEventType,
    ErrorCode,
    ErrorKind,
    PipelineState,
)
from summary_service.models.input_models import GenerationRequest
from summary_service.models.output_models import (
    GeneratedOutput,
    PersistedSummary,
    SummaryFailureResponse,
    SummarySuccessResponse,
)
from summary_service.models.pipeline_version import PipelineVersion
from summary_service.models.llm_models import (
    ChatMessage,
    CompletionRequest,
    CompletionResponse,
)

__all__ = [
    # Enums
    "AuditEventType",
    "ErrorCode",
    "ErrorKind",
    "PipelineState",
    # Input models
    "GenerationRequest",
    # Output models
    "GeneratedOutput",
    "PersistedSummary",
    "SummaryFailureResponse",
    "SummarySuccessResponse",
    # Pipeline version
    "PipelineVersion",
    # Completion models
    "ChatMessage",
    "CompletionRequest",
    "CompletionResponse",
]
