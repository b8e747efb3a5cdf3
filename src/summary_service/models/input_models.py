"""
Input data models for the Meeting Summary Service.

GenerationRequest is built by the request validator once the input shape,
resource existence and resource ownership have all been checked. It lives for
one invocation only.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationRequest(BaseModel):
    """
    A validated request to summarize one meeting transcript.

    Invariants:
    - content is non-empty after trimming
    - resource_id exists and is owned by requester_identity (checked upstream)
    """

    model_config = ConfigDict(frozen=True)

    resource_id: str = Field(..., min_length=1, description="Meeting identifier")
    content: str = Field(..., description="Raw meeting transcript")
    dry_run: bool = Field(default=False, description="Skip persistence when true")
    requester_identity: str = Field(..., min_length=1, description="Caller identity")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v
