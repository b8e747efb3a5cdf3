"""
Transport retry engine.

Wraps a BaseCompletionClient with a bounded retry loop:

1. Attempt the completion
2. On a retryable ErrorKind, wait (server Retry-After for RATE_LIMITED,
   otherwise exponential backoff with jitter) and try again
3. On a terminal ErrorKind, or once `max_retries` attempts are spent, raise
   GenerationFailedError carrying the last classification

Waits are non-blocking sleeps; no lock is held across them.

Usage:
    engine = TransportRetryEngine(client, BackoffPolicy(), max_retries=3)
    outcome = await engine.complete_with_retry(completion_request)
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from summary_service.config import Settings
from summary_service.llm.base_client import BaseCompletionClient
from summary_service.llm.exceptions import CompletionError
from summary_service.models.enums import ErrorKind
from summary_service.models.llm_models import CompletionRequest
from summary_service.monitoring.metrics import transport_retries_total
from summary_service.retry.backoff import BackoffPolicy
from summary_service.retry.exceptions import GenerationFailedError
from summary_service.retry.metadata import TransportOutcome
from summary_service.retry.state import RetryState

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class TransportRetryEngine:
    """
    Bounded retry loop around a single completion client.

    Attributes:
        client: Completion client performing one attempt per call
        backoff: Delay policy between attempts
        max_retries: Total attempts allowed per call (>= 1)
    """

    def __init__(
        self,
        client: BaseCompletionClient,
        backoff: Optional[BackoffPolicy] = None,
        max_retries: int = 3,
        sleep: SleepFunc = asyncio.sleep,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.client = client
        self.backoff = backoff or BackoffPolicy()
        self.max_retries = max_retries
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        client: BaseCompletionClient,
        settings: Settings,
        sleep: SleepFunc = asyncio.sleep,
    ) -> "TransportRetryEngine":
        return cls(
            client=client,
            backoff=BackoffPolicy.from_settings(settings),
            max_retries=settings.MAX_RETRIES,
            sleep=sleep,
        )

    async def complete_with_retry(self, request: CompletionRequest) -> TransportOutcome:
        """
        Run the completion with retries.

        Returns:
            TransportOutcome with the successful response and attempt count

        Raises:
            GenerationFailedError: terminal error, or budget exhausted
        """
        state = RetryState()

        for attempt in range(1, self.max_retries + 1):
            state.attempt_count = attempt
            try:
                response = await self.client.complete(request)
            except CompletionError as e:
                state.record_failure(e.kind)

                if not e.retryable:
                    logger.error(
                        "Terminal completion error, not retrying",
                        attempt=attempt,
                        error_kind=e.kind.value,
                        status_code=e.status_code,
                    )
                    raise GenerationFailedError(e, attempts=attempt, retry_after_ms=e.retry_after_ms)

                state.next_delay_ms = self._delay_after(attempt, e)

                if attempt >= self.max_retries:
                    logger.error(
                        "Transport retry budget exhausted",
                        attempts=attempt,
                        max_retries=self.max_retries,
                        error_kind=e.kind.value,
                        error_history=[k.value for k in state.error_history],
                    )
                    raise GenerationFailedError(
                        e, attempts=attempt, retry_after_ms=state.next_delay_ms
                    )

                logger.warning(
                    f"Retrying completion (attempt {attempt + 1}/{self.max_retries})",
                    error_kind=e.kind.value,
                    delay_ms=state.next_delay_ms,
                    server_directed=e.kind is ErrorKind.RATE_LIMITED and e.retry_after_ms is not None,
                )
                transport_retries_total.labels(error_kind=e.kind.value).inc()
                await self._sleep(state.next_delay_ms / 1000.0)
                continue

            if state.retries:
                logger.info(
                    "Completion succeeded after retries",
                    attempts=attempt,
                    error_history=[k.value for k in state.error_history],
                )
            return TransportOutcome(
                response=response,
                attempts=attempt,
                error_history=list(state.error_history),
            )

        # Unreachable: the loop either returns or raises on its last attempt
        raise AssertionError("retry loop exited without a result")

    def _delay_after(self, attempt: int, error: CompletionError) -> int:
        """
        Wait before the attempt following `attempt`.

        A server-supplied retry-after on RATE_LIMITED replaces the computed
        backoff for this one wait. The server value is used as given.
        """
        if error.kind is ErrorKind.RATE_LIMITED and error.retry_after_ms is not None:
            return error.retry_after_ms
        return self.backoff.compute_delay_ms(attempt)
