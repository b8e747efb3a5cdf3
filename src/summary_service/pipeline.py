"""
Summarization pipeline.

State machine for one invocation:

    VALIDATING -> GENERATING <-> VALIDATING_OUTPUT
        -> DRY_RUN_COMPLETE                       (dry run, nothing written)
        -> PERSISTING -> PERSISTED | PERSIST_FAILED

Terminal failures: INPUT_REJECTED, GENERATION_FAILED, OUTPUT_REJECTED,
PERSIST_FAILED. Every path ends in exactly one PipelineOutcome:

    DryRunResult | PersistedResult | PipelineFailure

A dry run can never produce a PersistedResult, and a PersistedResult always
carries the id of the row that was written.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Optional, Union

import structlog

from summary_service.audit.logger import AuditLogger
from summary_service.llm.prompt_builder import PromptBuilder
from summary_service.models.enums import (
    AuditEventType,
    ErrorCode,
    ErrorKind,
    PipelineState,
)
from summary_service.models.input_models import GenerationRequest
from summary_service.models.output_models import (
    PersistedSummary,
    SummaryFailureResponse,
    SummarySuccessResponse,
)
from summary_service.models.pipeline_version import PipelineVersion
from summary_service.monitoring.metrics import summaries_total, summary_duration_seconds
from summary_service.persistence.exceptions import StorageError
from summary_service.persistence.repository import SummaryRepository, summary_id_for
from summary_service.retry.exceptions import GenerationFailedError
from summary_service.validation.exceptions import InputError, ValidationFailedError
from summary_service.validation.output_validator import OutputValidator, ValidatedGeneration
from summary_service.validation.request_validator import RequestValidator

logger = structlog.get_logger(__name__)

TIMEOUT_MESSAGE = "The summarization request timed out. Please try again."
UNEXPECTED_MESSAGE = "An unexpected error occurred while generating the summary."


@dataclass(frozen=True)
class DryRunResult:
    """Summary generated and returned; nothing was written."""

    text: str
    processing_duration_ms: int
    retry_attempts: int
    quality_attempts: int
    state: PipelineState = field(default=PipelineState.DRY_RUN_COMPLETE, init=False)


@dataclass(frozen=True)
class PersistedResult:
    """Summary generated and upserted as the meeting's only summary row."""

    text: str
    summary_id: str
    processing_duration_ms: int
    retry_attempts: int
    quality_attempts: int
    state: PipelineState = field(default=PipelineState.PERSISTED, init=False)


@dataclass(frozen=True)
class PipelineFailure:
    """
    Terminal failure.

    message is safe to show to callers. raw_output is set only for
    VALIDATION_FAILED; retry_after_ms only for RATE_LIMITED.
    """

    state: PipelineState
    error_code: ErrorCode
    message: str
    raw_output: Optional[str] = None
    retry_after_ms: Optional[int] = None


PipelineOutcome = Union[DryRunResult, PersistedResult, PipelineFailure]

# Terminal state for an invocation interrupted (timeout, unexpected error)
# while in a given non-terminal state
_INTERRUPTED_STATE = {
    PipelineState.VALIDATING: PipelineState.INPUT_REJECTED,
    PipelineState.GENERATING: PipelineState.GENERATION_FAILED,
    PipelineState.VALIDATING_OUTPUT: PipelineState.OUTPUT_REJECTED,
    PipelineState.PERSISTING: PipelineState.PERSIST_FAILED,
}


@dataclass
class _Invocation:
    """Mutable per-invocation progress (never shared between invocations)."""

    resource_id: str
    started: float = field(default_factory=time.monotonic)
    state: PipelineState = PipelineState.VALIDATING

    def move_to(self, state: PipelineState) -> None:
        if state is not self.state:
            logger.debug(
                "Pipeline state change",
                resource_id=self.resource_id,
                from_state=self.state.value,
                to_state=state.value,
            )
        self.state = state

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started) * 1000)


class SummarizationPipeline:
    """
    Orchestrates validation, generation, quality checks and persistence.

    Attributes:
        request_validator: Field, existence and ownership checks
        output_validator: Quality-gated generation (wraps the transport loop)
        prompt_builder: Renders the completion request for a transcript
        repository: Upserts the summary row
        audit: Records dry runs and terminal failures off the response path
        version: Model/prompt/service identifiers stamped on rows and events
        timeout_seconds: Bound on the whole invocation (None disables it)
    """

    def __init__(
        self,
        request_validator: RequestValidator,
        output_validator: OutputValidator,
        prompt_builder: PromptBuilder,
        repository: SummaryRepository,
        audit: AuditLogger,
        version: PipelineVersion,
        timeout_seconds: Optional[float] = 300.0,
    ):
        self.request_validator = request_validator
        self.output_validator = output_validator
        self.prompt_builder = prompt_builder
        self.repository = repository
        self.audit = audit
        self.version = version
        self.timeout_seconds = timeout_seconds

    async def run(
        self,
        resource_id: Optional[str],
        content: Optional[str],
        dry_run: bool,
        requester_identity: Optional[str],
    ) -> PipelineOutcome:
        """
        Run one invocation to a terminal outcome.

        Never raises for domain failures; they come back as PipelineFailure.
        """
        invocation = _Invocation(resource_id=resource_id or "")
        log = logger.bind(resource_id=resource_id, dry_run=dry_run)

        try:
            outcome = await asyncio.wait_for(
                self._run(invocation, resource_id, content, dry_run, requester_identity),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            log.error(
                "Summarization timed out",
                timeout_seconds=self.timeout_seconds,
                state=invocation.state.value,
            )
            outcome = PipelineFailure(
                state=_INTERRUPTED_STATE.get(invocation.state, PipelineState.GENERATION_FAILED),
                error_code=ErrorCode.TIMEOUT,
                message=TIMEOUT_MESSAGE,
            )
        except Exception as e:
            log.error(
                "Unexpected error in summarization pipeline",
                state=invocation.state.value,
                error_type=type(e).__name__,
                exc_info=True,
            )
            outcome = PipelineFailure(
                state=_INTERRUPTED_STATE.get(invocation.state, PipelineState.GENERATION_FAILED),
                error_code=ErrorCode.UNEXPECTED,
                message=UNEXPECTED_MESSAGE,
            )

        summaries_total.labels(outcome=outcome.state.value).inc()
        summary_duration_seconds.labels(dry_run=str(dry_run).lower()).observe(
            invocation.elapsed_ms() / 1000.0
        )
        if isinstance(outcome, PipelineFailure):
            log.warning(
                "Summarization failed",
                state=outcome.state.value,
                error_code=outcome.error_code.value,
                duration_ms=invocation.elapsed_ms(),
            )
        else:
            log.info(
                "Summarization completed",
                state=outcome.state.value,
                duration_ms=outcome.processing_duration_ms,
                retry_attempts=outcome.retry_attempts,
                quality_attempts=outcome.quality_attempts,
            )
        return outcome

    async def _run(
        self,
        invocation: _Invocation,
        resource_id: Optional[str],
        content: Optional[str],
        dry_run: bool,
        requester_identity: Optional[str],
    ) -> PipelineOutcome:
        invocation.move_to(PipelineState.VALIDATING)
        try:
            request = await self.request_validator.validate(
                resource_id, content, dry_run, requester_identity
            )
        except (InputError, StorageError) as e:
            invocation.move_to(PipelineState.INPUT_REJECTED)
            return PipelineFailure(
                state=invocation.state, error_code=e.error_code, message=e.message
            )

        completion_request = self.prompt_builder.build_request(request.content)

        try:
            generation = await self.output_validator.generate_validated(
                completion_request, on_state=invocation.move_to
            )
        except GenerationFailedError as e:
            invocation.move_to(PipelineState.GENERATION_FAILED)
            self._audit(
                AuditEventType.TRANSPORT_EXHAUSTED,
                request,
                error_code=e.error_code,
                attempts=e.attempts,
            )
            return PipelineFailure(
                state=invocation.state,
                error_code=e.error_code,
                message=e.message,
                retry_after_ms=e.retry_after_ms if e.kind is ErrorKind.RATE_LIMITED else None,
            )
        except ValidationFailedError as e:
            invocation.move_to(PipelineState.OUTPUT_REJECTED)
            self._audit(
                AuditEventType.VALIDATION_EXHAUSTED,
                request,
                error_code=e.error_code,
                output=e.raw_output,
                attempts=e.attempts,
            )
            return PipelineFailure(
                state=invocation.state,
                error_code=e.error_code,
                message=e.message,
                raw_output=e.raw_output,
            )

        duration_ms = invocation.elapsed_ms()
        text = generation.output.text

        if request.dry_run:
            invocation.move_to(PipelineState.DRY_RUN_COMPLETE)
            self._audit(
                AuditEventType.DRY_RUN_COMPLETED,
                request,
                output=text,
                attempts=generation.quality_attempts,
            )
            return DryRunResult(
                text=text,
                processing_duration_ms=duration_ms,
                retry_attempts=generation.transport_retries,
                quality_attempts=generation.quality_attempts,
            )

        invocation.move_to(PipelineState.PERSISTING)
        try:
            summary_id = await self.repository.upsert(
                self._build_summary(request, generation, duration_ms)
            )
        except StorageError as e:
            invocation.move_to(PipelineState.PERSIST_FAILED)
            self._audit(
                AuditEventType.PERSIST_FAILED,
                request,
                error_code=e.error_code,
                output=text,
                attempts=generation.quality_attempts,
            )
            return PipelineFailure(state=invocation.state, error_code=e.error_code, message=e.message)

        invocation.move_to(PipelineState.PERSISTED)
        return PersistedResult(
            text=text,
            summary_id=summary_id,
            processing_duration_ms=duration_ms,
            retry_attempts=generation.transport_retries,
            quality_attempts=generation.quality_attempts,
        )

    def _build_summary(
        self,
        request: GenerationRequest,
        generation: ValidatedGeneration,
        duration_ms: int,
    ) -> PersistedSummary:
        return PersistedSummary(
            resource_id=request.resource_id,
            summary_id=summary_id_for(request.resource_id),
            text=generation.output.text,
            model_identifier=generation.model_version or self.version.model_identifier,
            prompt_version=self.version.prompt_version,
            processing_duration_ms=duration_ms,
            retry_attempts=generation.transport_retries,
            quality_attempts=generation.quality_attempts,
        )

    def _audit(
        self,
        event_type: AuditEventType,
        request: GenerationRequest,
        error_code: Optional[ErrorCode] = None,
        output: Optional[str] = None,
        attempts: Optional[int] = None,
    ) -> None:
        self.audit.record(
            self.audit.build_event(
                event_type,
                resource_id=request.resource_id,
                content=request.content,
                version=self.version,
                error_code=error_code,
                output=output,
                attempts=attempts,
            )
        )


def to_response(outcome: PipelineOutcome) -> Union[SummarySuccessResponse, SummaryFailureResponse]:
    """Render a PipelineOutcome as the caller-facing contract."""
    if isinstance(outcome, PersistedResult):
        return SummarySuccessResponse(
            text=outcome.text,
            dry_run=False,
            processing_duration_ms=outcome.processing_duration_ms,
            retry_attempts=outcome.retry_attempts,
            persisted_id=outcome.summary_id,
        )
    if isinstance(outcome, DryRunResult):
        return SummarySuccessResponse(
            text=outcome.text,
            dry_run=True,
            processing_duration_ms=outcome.processing_duration_ms,
            retry_attempts=outcome.retry_attempts,
        )
    return SummaryFailureResponse(
        error_code=outcome.error_code,
        message=outcome.message,
        raw_output=outcome.raw_output if outcome.error_code is ErrorCode.VALIDATION_FAILED else None,
        retry_after_ms=outcome.retry_after_ms,
    )
