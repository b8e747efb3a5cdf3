"""
Redis persistence layer.

- redis_client.py: shared async connection pool
- repository.py: SummaryRepository, one upserted summary per meeting
- directory.py: ResourceDirectory protocol + Redis-backed ownership lookups
- exceptions.py: StorageError

Storage Strategy:
- Summaries stored as JSON under "summary:{resource_id}" (SET = upsert)
- Meeting ownership stored in hash "meeting:{resource_id}" field "owner_id"
"""

from summary_service.persistence.directory import (
    RedisResourceDirectory,
    ResourceDirectory,
)
from summary_service.persistence.exceptions import StorageError
from summary_service.persistence.redis_client import (
    RedisClient,
    get_async_redis_client,
)
from summary_service.persistence.repository import (
    SummaryRepository,
    summary_id_for,
)

__all__ = [
    "RedisClient",
    "RedisResourceDirectory",
    "ResourceDirectory",
    "StorageError",
    "SummaryRepository",
    "get_async_redis_client",
    "summary_id_for",
]
