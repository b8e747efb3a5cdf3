"""
OpenAI-compatible completion client.

Talks to any server exposing POST {base_url}/chat/completions (OpenAI,
Azure-style proxies, Ollama's /v1 endpoint, vLLM) using httpx.AsyncClient.

Every failure is classified here, once, into an ErrorKind:
- 429                          -> RATE_LIMITED (Retry-After honored upstream)
- 401                          -> INVALID_CREDENTIAL
- 403                          -> FORBIDDEN
- 408 / httpx.TimeoutException -> TIMEOUT
- 5xx                          -> SERVER_ERROR
- httpx.TransportError         -> NETWORK_ERROR
- anything else                -> UNCLASSIFIED
"""

import json
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

import httpx
import structlog

from summary_service.llm.base_client import BaseCompletionClient
from summary_service.llm.exceptions import CompletionError
from summary_service.models.enums import ErrorKind
from summary_service.models.llm_models import CompletionRequest, CompletionResponse
from summary_service.monitoring.metrics import (
    completion_attempts_total,
    completion_latency_seconds,
    completion_tokens_total,
)


logger = structlog.get_logger(__name__)


def classify_status(status_code: int) -> ErrorKind:
    """Map a non-2xx HTTP status to an ErrorKind."""
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code == 401:
        return ErrorKind.INVALID_CREDENTIAL
    if status_code == 403:
        return ErrorKind.FORBIDDEN
    if status_code == 408:
        return ErrorKind.TIMEOUT
    if 500 <= status_code <= 599:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.UNCLASSIFIED


def parse_retry_after(headers: httpx.Headers, now: Optional[datetime] = None) -> Optional[int]:
    """
    Extract the server's requested wait in milliseconds.

    Checks `retry-after-ms` first, then `Retry-After` as delta-seconds or an
    HTTP-date. Returns None when absent or unparseable.

    Examples:
        Retry-After: 2                             -> 2000
        retry-after-ms: 350                        -> 350
        Retry-After: Wed, 21 Oct 2026 07:28:00 GMT -> ms until that instant
    """
    raw_ms = headers.get("retry-after-ms")
    if raw_ms:
        try:
            return max(0, int(float(raw_ms)))
        except (ValueError, OverflowError):
            pass

    raw = headers.get("retry-after")
    if not raw:
        return None
    raw = raw.strip()

    try:
        return max(0, int(float(raw) * 1000))
    except (ValueError, OverflowError):
        pass

    try:
        when = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0, int((when - now).total_seconds() * 1000))


class OpenAICompletionClient(BaseCompletionClient):
    """
    OpenAI-compatible completion client using httpx for async HTTP.

    API Endpoints:
    - POST /chat/completions: generate a completion
    - GET /models: lightweight reachability check

    Performs one attempt per `complete()` call; the persistent AsyncClient
    gives connection pooling across attempts and invocations.
    """

    def __init__(
        self,
        base_url: str = "https://api.openai.com/v1",
        api_key: str = "",
        timeout: float = 60.0,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, without the /chat/completions suffix
            api_key: Bearer token; omitted from headers when empty
            timeout: Per-attempt timeout in seconds
            connection_limits: httpx pool limits (default: 10 connections)
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(base_url, timeout, **kwargs)

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Content-Type": "application/json"}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                headers=headers,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        One completion attempt.

        POST /chat/completions with payload:
        {
            "model": "gpt-4o-mini",
            "messages": [{"role": "system", ...}, {"role": "user", ...}],
            "temperature": 0.3,
            "max_tokens": 1500
        }
        """
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [m.model_dump() for m in request.messages],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

        start_time = time.perf_counter()
        try:
            client = await self._get_client()
            response = await client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise self._fail(
                request,
                ErrorKind.TIMEOUT,
                f"Completion request timed out after {self.timeout}s",
                start_time,
                details={"error_type": type(e).__name__},
            )
        except httpx.TransportError as e:
            raise self._fail(
                request,
                ErrorKind.NETWORK_ERROR,
                "Network error reaching completion endpoint",
                start_time,
                details={"error_type": type(e).__name__, "error": str(e)},
            )

        if response.status_code >= 400:
            kind = classify_status(response.status_code)
            raise self._fail(
                request,
                kind,
                f"Completion endpoint returned HTTP {response.status_code}",
                start_time,
                status_code=response.status_code,
                retry_after_ms=parse_retry_after(response.headers),
                details={"body": response.text[:500]},
            )

        try:
            data = response.json()
            choice = data["choices"][0]
            content = choice["message"].get("content") or ""
            if not isinstance(content, str):
                raise TypeError(f"content is {type(content).__name__}, expected str")
        except (json.JSONDecodeError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise self._fail(
                request,
                ErrorKind.UNCLASSIFIED,
                "Malformed completion response",
                start_time,
                status_code=response.status_code,
                details={"parse_error": type(e).__name__, "body": response.text[:500]},
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        model_version = data.get("model") or request.model
        usage = data.get("usage") or {}
        prompt_tokens = usage.get("prompt_tokens")
        completion_tokens = usage.get("completion_tokens")

        logger.info(
            "Completion successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=choice.get("finish_reason"),
            content_length=len(content),
        )

        completion_attempts_total.labels(outcome="success").inc()
        completion_latency_seconds.labels(
            model=model_version, success="true"
        ).observe(latency_ms / 1000.0)
        if prompt_tokens:
            completion_tokens_total.labels(model=model_version, token_type="prompt").inc(prompt_tokens)
        if completion_tokens:
            completion_tokens_total.labels(model=model_version, token_type="completion").inc(completion_tokens)

        return CompletionResponse(
            content=content,
            model_version=model_version,
            finish_reason=choice.get("finish_reason"),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            raw_metadata={"id": data.get("id"), "created": data.get("created")},
        )

    def _fail(
        self,
        request: CompletionRequest,
        kind: ErrorKind,
        message: str,
        start_time: float,
        status_code: Optional[int] = None,
        retry_after_ms: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> CompletionError:
        """Log, count and build the classified error for a failed attempt."""
        latency = time.perf_counter() - start_time
        logger.warning(
            "Completion attempt failed",
            model=request.model,
            error_kind=kind.value,
            status_code=status_code,
            retry_after_ms=retry_after_ms,
            latency_ms=int(latency * 1000),
        )
        completion_attempts_total.labels(outcome=kind.value).inc()
        completion_latency_seconds.labels(model=request.model, success="false").observe(latency)
        return CompletionError(
            kind,
            message,
            retry_after_ms=retry_after_ms,
            status_code=status_code,
            details=details,
        )

    async def health_check(self) -> bool:
        """Check reachability via GET /models."""
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=5.0)
            response.raise_for_status()
            return True
        except Exception as e:
            logger.warning("Completion endpoint health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed completion client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
