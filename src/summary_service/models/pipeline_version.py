"""
Pipeline versioning for audit and reproducibility.

PipelineVersion captures the identifiers needed to explain how a stored
summary was produced: which model, which prompt revision, which service
build. It tags every persisted summary and every audit event.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineVersion:
    """
    Immutable version snapshot attached to summaries and audit events.

    Attributes:
        model_identifier: Model requested from the completion endpoint
        prompt_version: Prompt template revision tag (e.g., "summarize-v1")
        service_version: Version of this service
    """

    model_identifier: str
    prompt_version: str
    service_version: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "model_identifier": self.model_identifier,
            "prompt_version": self.prompt_version,
            "service_version": self.service_version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PipelineVersion":
        """Create from dictionary."""
        return cls(
            model_identifier=data["model_identifier"],
            prompt_version=data["prompt_version"],
            service_version=data["service_version"],
        )

    def __str__(self) -> str:
        return (
            f"PipelineVersion("
            f"model={self.model_identifier}, "
            f"prompt={self.prompt_version}, "
            f"service={self.service_version})"
        )
