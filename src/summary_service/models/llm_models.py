"""
Completion-specific data models for the request/response cycle.

These models are internal to the LLM layer and describe one raw call to the
completion endpoint. They are separate from the summary models so the
completion client can be swapped without touching the pipeline.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class ChatMessage(BaseModel):
    """One chat message sent to the completion endpoint."""
    model_config = ConfigDict(frozen=True)

    role: str = Field(..., description="'system' or 'user'")
    content: str


class CompletionRequest(BaseModel):
    """
    Provider-neutral request for a single text completion.

    The same request object is re-sent unchanged on every transport retry and
    every quality retry.
    """
    model_config = ConfigDict(frozen=True)

    messages: tuple[ChatMessage, ...] = Field(..., min_length=1)
    model: str = Field(..., description="Model identifier (e.g., 'gpt-4o-mini')")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1500, ge=1, le=16384)


class CompletionResponse(BaseModel):
    """
    Raw completion result plus metadata for audit/logging.

    Quality judgement of `content` happens in the validation layer.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text (may be empty)")
    model_version: str = Field(..., description="Model version reported by the server")
    finish_reason: Optional[str] = Field(default=None)
    prompt_tokens: Optional[int] = Field(default=None)
    completion_tokens: Optional[int] = Field(default=None)
    latency_ms: int = Field(..., ge=0)
    raw_metadata: Dict[str, Any] = Field(default_factory=dict)
