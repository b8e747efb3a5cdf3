"""
Unit tests for OpenAICompletionClient.

Uses httpx.MockTransport, so no network access is needed.
"""

from datetime import datetime, timezone

import httpx
import pytest

from summary_service.llm.exceptions import CompletionError
from summary_service.llm.openai_client import (
    OpenAICompletionClient,
    classify_status,
    parse_retry_after,
)
from summary_service.models.enums import ErrorKind


def completion_body(content="Summary text", model="gpt-4o-mini-2024-07-18"):
    return {
        "id": "chatcmpl-123",
        "created": 1700000000,
        "model": model,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 100, "completion_tokens": 20, "total_tokens": 120},
    }


def make_client(handler, api_key="sk-test"):
    return OpenAICompletionClient(
        base_url="http://completion.test/v1",
        api_key=api_key,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.parametrize(
    "status_code, kind",
    [
        (429, ErrorKind.RATE_LIMITED),
        (401, ErrorKind.INVALID_CREDENTIAL),
        (403, ErrorKind.FORBIDDEN),
        (408, ErrorKind.TIMEOUT),
        (500, ErrorKind.SERVER_ERROR),
        (502, ErrorKind.SERVER_ERROR),
        (503, ErrorKind.SERVER_ERROR),
        (400, ErrorKind.UNCLASSIFIED),
        (404, ErrorKind.UNCLASSIFIED),
        (422, ErrorKind.UNCLASSIFIED),
    ],
)
def test_classify_status(status_code, kind):
    assert classify_status(status_code) is kind


class TestParseRetryAfter:
    def test_absent(self):
        assert parse_retry_after(httpx.Headers({})) is None

    def test_seconds(self):
        assert parse_retry_after(httpx.Headers({"Retry-After": "2"})) == 2000

    def test_fractional_seconds(self):
        assert parse_retry_after(httpx.Headers({"Retry-After": "1.5"})) == 1500

    def test_milliseconds_header_preferred(self):
        headers = httpx.Headers({"Retry-After": "20", "retry-after-ms": "350"})
        assert parse_retry_after(headers) == 350

    def test_http_date(self):
        now = datetime(2026, 10, 21, 7, 27, 50, tzinfo=timezone.utc)
        headers = httpx.Headers({"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"})
        assert parse_retry_after(headers, now=now) == 10000

    def test_date_in_past_is_zero(self):
        now = datetime(2026, 10, 22, tzinfo=timezone.utc)
        headers = httpx.Headers({"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"})
        assert parse_retry_after(headers, now=now) == 0

    def test_garbage(self):
        assert parse_retry_after(httpx.Headers({"Retry-After": "soon"})) is None

    @pytest.mark.parametrize("value", ["inf", "1e400"])
    def test_non_finite_seconds(self, value):
        assert parse_retry_after(httpx.Headers({"Retry-After": value})) is None

    @pytest.mark.parametrize("value", ["inf", "1e400"])
    def test_non_finite_milliseconds_falls_back(self, value):
        headers = httpx.Headers({"retry-after-ms": value, "Retry-After": "2"})
        assert parse_retry_after(headers) == 2000


@pytest.mark.asyncio
async def test_complete_success(completion_request):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json=completion_body())

    client = make_client(handler)
    response = await client.complete(completion_request)
    await client.close()

    assert response.content == "Summary text"
    assert response.model_version == "gpt-4o-mini-2024-07-18"
    assert response.prompt_tokens == 100
    assert response.completion_tokens == 20
    assert response.finish_reason == "stop"
    assert seen["url"] == "http://completion.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"


@pytest.mark.asyncio
async def test_no_auth_header_without_key(completion_request):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json=completion_body())

    client = make_client(handler, api_key="")
    await client.complete(completion_request)
    await client.close()

    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_empty_content_is_not_a_transport_error(completion_request):
    client = make_client(lambda request: httpx.Response(200, json=completion_body(content=None)))

    response = await client.complete(completion_request)
    await client.close()

    assert response.content == ""


@pytest.mark.asyncio
async def test_rate_limited_carries_retry_after(completion_request):
    client = make_client(
        lambda request: httpx.Response(429, headers={"Retry-After": "3"}, json={"error": "slow down"})
    )

    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is ErrorKind.RATE_LIMITED
    assert exc_info.value.retry_after_ms == 3000
    assert exc_info.value.status_code == 429
    assert exc_info.value.retryable


@pytest.mark.asyncio
async def test_rate_limited_with_unusable_retry_after(completion_request):
    client = make_client(
        lambda request: httpx.Response(429, headers={"Retry-After": "inf"}, json={"error": "slow down"})
    )

    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is ErrorKind.RATE_LIMITED
    assert exc_info.value.retry_after_ms is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, kind",
    [(401, ErrorKind.INVALID_CREDENTIAL), (503, ErrorKind.SERVER_ERROR), (418, ErrorKind.UNCLASSIFIED)],
)
async def test_http_errors_classified(status_code, kind, completion_request):
    client = make_client(lambda request: httpx.Response(status_code, text="nope"))

    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is kind


@pytest.mark.asyncio
async def test_timeout_classified(completion_request):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is ErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_connection_error_classified(completion_request):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is ErrorKind.NETWORK_ERROR


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"object": "list"}),
        httpx.Response(200, json=completion_body(content=[{"type": "text", "text": "Summary"}])),
    ],
)
async def test_malformed_body_is_unclassified(response, completion_request):
    client = make_client(lambda request: response)

    with pytest.raises(CompletionError) as exc_info:
        await client.complete(completion_request)
    await client.close()

    assert exc_info.value.kind is ErrorKind.UNCLASSIFIED
    assert not exc_info.value.retryable


@pytest.mark.asyncio
async def test_health_check():
    def handler(request):
        assert request.url.path == "/v1/models"
        return httpx.Response(200, json={"data": []})

    client = make_client(handler)
    assert await client.health_check() is True
    await client.close()


@pytest.mark.asyncio
async def test_health_check_unreachable():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = make_client(handler)
    assert await client.health_check() is False
    await client.close()
