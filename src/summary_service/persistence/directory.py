"""
Resource ownership lookups.

The request validator asks one question of this boundary: who owns
resource_id, if it exists at all. Keeping "does not exist" (None) apart from
"owned by someone else" lets callers get NOT_FOUND and ACCESS_DENIED as
distinct answers.
"""

from typing import Optional, Protocol

import structlog
from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from summary_service.persistence.exceptions import StorageError

logger = structlog.get_logger(__name__)


class ResourceDirectory(Protocol):
    """Answers ownership questions about meetings."""

    async def get_owner(self, resource_id: str) -> Optional[str]:
        """
        Owner identity of `resource_id`, or None when it does not exist.

        Raises:
            StorageError: the directory could not be queried
        """
        ...


class RedisResourceDirectory:
    """
    Ownership directory backed by Redis hashes.

    Storage: hash "meeting:{resource_id}" with at least an "owner_id" field.
    """

    KEY_PREFIX = "meeting:"
    OWNER_FIELD = "owner_id"

    def __init__(self, redis_client: AsyncRedis):
        self.redis = redis_client

    async def get_owner(self, resource_id: str) -> Optional[str]:
        try:
            return await self.redis.hget(f"{self.KEY_PREFIX}{resource_id}", self.OWNER_FIELD)
        except RedisError as e:
            logger.error("Ownership lookup failed", resource_id=resource_id, error=str(e))
            raise StorageError(
                "The meeting could not be looked up.",
                details={"resource_id": resource_id, "error_type": type(e).__name__},
            ) from e

    async def register(self, resource_id: str, owner_id: str) -> None:
        """Record `owner_id` as the owner of `resource_id`."""
        try:
            await self.redis.hset(
                f"{self.KEY_PREFIX}{resource_id}", mapping={self.OWNER_FIELD: owner_id}
            )
        except RedisError as e:
            raise StorageError(
                "The meeting could not be registered.",
                details={"resource_id": resource_id, "error_type": type(e).__name__},
            ) from e
