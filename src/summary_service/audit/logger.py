"""
Audit logger.

Fans events out to every observer as background tasks, so recording never
delays the response and an observer failure never changes the outcome of the
invocation it describes.
"""

import asyncio
from typing import Iterable, Optional

import structlog

from summary_service.audit.models import AuditEvent
from summary_service.audit.observers import AuditObserver
from summary_service.models.enums import AuditEventType, ErrorCode
from summary_service.models.pipeline_version import PipelineVersion
from summary_service.monitoring.metrics import audit_failures_total

logger = structlog.get_logger(__name__)


class AuditLogger:
    """
    Non-blocking audit sink.

    Attributes:
        observers: Destinations for every event
        sample_chars: Length of the transcript sample attached to events
    """

    def __init__(self, observers: Iterable[AuditObserver], sample_chars: int = 200):
        self.observers = list(observers)
        self.sample_chars = sample_chars
        self._pending: set[asyncio.Task] = set()

    def build_event(
        self,
        event_type: AuditEventType,
        resource_id: str,
        content: str,
        version: PipelineVersion,
        error_code: Optional[ErrorCode] = None,
        output: Optional[str] = None,
        attempts: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            resource_id=resource_id,
            input_sample=content[: self.sample_chars],
            prompt_version=version.prompt_version,
            model_identifier=version.model_identifier,
            error_code=error_code,
            output=output,
            attempts=attempts,
        )

    def record(self, event: AuditEvent) -> None:
        """Schedule delivery of `event` to every observer and return at once."""
        for observer in self.observers:
            task = asyncio.create_task(self._deliver(observer, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _deliver(self, observer: AuditObserver, event: AuditEvent) -> None:
        name = type(observer).__name__
        try:
            await observer.record(event)
        except Exception as e:
            audit_failures_total.labels(observer=name).inc()
            logger.error(
                "Audit observer failed",
                observer=name,
                event_type=event.event_type.value,
                resource_id=event.resource_id,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def drain(self) -> None:
        """Wait for every scheduled delivery to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
