"""
Transport retry with exponential backoff and jitter.

Retries completion attempts that failed with a retryable ErrorKind
(RATE_LIMITED, TIMEOUT, SERVER_ERROR, NETWORK_ERROR) up to MAX_RETRIES total
attempts. Terminal kinds (INVALID_CREDENTIAL, FORBIDDEN, UNCLASSIFIED) stop
immediately.

Main Components:
    - TransportRetryEngine: The bounded retry loop
    - BackoffPolicy: delay(n) = min(max, base * mult^(n-1)) * (1 + jitter * U)
    - RetryState: Per-call attempt counter and last error kind
    - TransportOutcome: Successful response plus attempts used
    - GenerationFailedError: Raised on terminal failure / exhaustion

Usage:
    >>> from summary_service.retry import TransportRetryEngine
    >>> engine = TransportRetryEngine.from_settings(client, settings)
    >>> outcome = await engine.complete_with_retry(request)
"""

from summary_service.retry.backoff import BackoffPolicy
from summary_service.retry.engine import TransportRetryEngine
from summary_service.retry.exceptions import GenerationFailedError
from summary_service.retry.metadata import TransportOutcome
from summary_service.retry.state import RetryState

__all__ = [
    "BackoffPolicy",
    "GenerationFailedError",
    "RetryState",
    "TransportOutcome",
    "TransportRetryEngine",
]
