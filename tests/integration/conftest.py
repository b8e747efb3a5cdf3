"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Integration tests are skipped if required services are not running.
"""

import pytest
import pytest_asyncio
from redis import Redis
from redis.asyncio import Redis as AsyncRedis

TEST_REDIS_URL = "redis://localhost:6379/15"  # Test database


@pytest.fixture(scope="session")
def check_redis():
    """Check if Redis is available at localhost:6379.

    Skips tests if Redis is not reachable.
    """
    try:
        client = Redis.from_url(TEST_REDIS_URL)
        client.ping()
        client.close()
    except Exception as e:
        pytest.skip(f"Redis not available: {e}")


@pytest_asyncio.fixture
async def real_async_redis_client(check_redis):
    """Real AsyncRedis client instance for integration tests (async).

    Uses database 15, flushed before and after each test.
    """
    client = AsyncRedis.from_url(TEST_REDIS_URL, decode_responses=True)
    await client.flushdb()

    yield client

    await client.flushdb()
    await client.aclose()


@pytest.fixture
def integration_settings(test_settings):
    """Settings for integration tests with real services."""
    test_settings.REDIS_URL = TEST_REDIS_URL
    test_settings.PROMETHEUS_ENABLED = False
    return test_settings
