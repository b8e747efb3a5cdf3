"""
Output validation loop.

Runs the transport retry loop, judges the text with a QualityGate and, on
rejection, generates again with the same prompt. The quality budget
(`max_attempts`) is counted separately from the transport budget:

    quality attempt 1 -> transport loop (up to MAX_RETRIES attempts)
    quality attempt 2 -> transport loop (up to MAX_RETRIES attempts)
    ...

A transport failure inside any quality attempt ends the loop at once with
GenerationFailedError; it does not use up a quality attempt.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import structlog

from summary_service.models.enums import PipelineState
from summary_service.models.llm_models import CompletionRequest
from summary_service.models.output_models import GeneratedOutput
from summary_service.monitoring.metrics import quality_rejections_total
from summary_service.retry.backoff import BackoffPolicy
from summary_service.retry.engine import TransportRetryEngine
from summary_service.validation.exceptions import (
    OutputRejectedError,
    ValidationFailedError,
)
from summary_service.validation.quality import MinLengthQualityGate, QualityGate

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
StateHook = Callable[[PipelineState], None]


@dataclass(frozen=True)
class ValidatedGeneration:
    """
    Accepted output plus the counters that produced it.

    Attributes:
        output: The accepted text
        transport_retries: Transport retries summed over every generation
        quality_attempts: Generations judged, including the accepted one
        model_version: Model version reported for the accepted generation
    """

    output: GeneratedOutput
    transport_retries: int
    quality_attempts: int
    model_version: str


class OutputValidator:
    """Quality-gated generation with its own retry budget."""

    def __init__(
        self,
        retry_engine: TransportRetryEngine,
        gate: Optional[QualityGate] = None,
        max_attempts: int = 2,
        backoff: Optional[BackoffPolicy] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.retry_engine = retry_engine
        self.gate = gate or MinLengthQualityGate()
        self.max_attempts = max_attempts
        self.backoff = backoff or retry_engine.backoff
        self._sleep = sleep

    async def generate_validated(
        self,
        request: CompletionRequest,
        on_state: Optional[StateHook] = None,
    ) -> ValidatedGeneration:
        """
        Generate until the gate accepts or the quality budget is spent.

        `on_state` is told each time the loop moves between GENERATING and
        VALIDATING_OUTPUT.

        Raises:
            GenerationFailedError: transport loop gave up (propagated unchanged)
            ValidationFailedError: every generation was rejected; carries the
                last rejected text
        """
        transport_retries = 0
        last_rejection: Optional[OutputRejectedError] = None

        for attempt in range(1, self.max_attempts + 1):
            if on_state:
                on_state(PipelineState.GENERATING)
            outcome = await self.retry_engine.complete_with_retry(request)
            transport_retries += outcome.retries
            text = outcome.response.content

            if on_state:
                on_state(PipelineState.VALIDATING_OUTPUT)

            try:
                self.gate.check(text)
            except OutputRejectedError as e:
                last_rejection = e
                quality_rejections_total.labels(reason=e.reason).inc()
                logger.warning(
                    f"Generated summary rejected (attempt {attempt}/{self.max_attempts})",
                    reason=e.reason,
                    text_length=len(text),
                )
                if attempt < self.max_attempts:
                    await self._sleep(self.backoff.compute_delay_ms(attempt) / 1000.0)
                continue

            if attempt > 1:
                logger.info("Summary accepted after quality retry", quality_attempts=attempt)
            return ValidatedGeneration(
                output=GeneratedOutput(text=text, accepted=True),
                transport_retries=transport_retries,
                quality_attempts=attempt,
                model_version=outcome.response.model_version,
            )

        logger.error(
            "Quality budget exhausted",
            attempts=self.max_attempts,
            reason=last_rejection.reason if last_rejection else None,
        )
        raise ValidationFailedError(
            raw_output=last_rejection.text if last_rejection else "",
            attempts=self.max_attempts,
            reason=last_rejection.reason if last_rejection else None,
            transport_retries=transport_retries,
        )
