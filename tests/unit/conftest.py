"""Unit test fixtures (fakes and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock

import pytest

from summary_service.models.llm_models import ChatMessage, CompletionRequest
from tests.unit.fakes import FakeAsyncRedis, SleepRecorder


@pytest.fixture
def completion_request() -> CompletionRequest:
    return CompletionRequest(
        messages=(
            ChatMessage(role="system", content="You summarize meetings."),
            ChatMessage(role="user", content="Summarize: hello."),
        ),
        model="gpt-4o-mini",
    )


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fake_redis() -> FakeAsyncRedis:
    return FakeAsyncRedis()


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for unit tests (async)."""
    mock = AsyncMock()
    mock.set = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.delete = AsyncMock(return_value=1)
    mock.hget = AsyncMock(return_value=None)
    mock.hset = AsyncMock(return_value=1)
    mock.lpush = AsyncMock(return_value=1)
    mock.ltrim = AsyncMock(return_value=True)
    mock.lrange = AsyncMock(return_value=[])
    return mock
