"""
Repository pattern for Redis-based summary persistence.

Storage Strategy:
- Summary: string "summary:{resource_id}" -> PersistedSummary JSON
- One key per meeting, so SET is an upsert: a repeated write replaces the
  previous summary and there is never more than one row per meeting
- Concurrent writers for the same meeting: last write wins (completion order)
"""

import uuid
from typing import Optional

import structlog
from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from summary_service.models.output_models import PersistedSummary
from summary_service.persistence.exceptions import StorageError

logger = structlog.get_logger(__name__)

# Namespace for deriving stable summary ids from resource ids
SUMMARY_ID_NAMESPACE = uuid.UUID("6f1c1f2e-4c55-4b9a-9d0c-2d1f5a7f3c11")


def summary_id_for(resource_id: str) -> str:
    """Stable summary identifier for a meeting (same id across overwrites)."""
    return str(uuid.uuid5(SUMMARY_ID_NAMESPACE, resource_id))


class SummaryRepository:
    """
    Async repository for persisted summaries.

    Every failure of the underlying store surfaces as StorageError; nothing
    is retried here.
    """

    KEY_PREFIX = "summary:"

    def __init__(self, redis_client: AsyncRedis):
        self.redis = redis_client

    def _key(self, resource_id: str) -> str:
        return f"{self.KEY_PREFIX}{resource_id}"

    async def upsert(self, summary: PersistedSummary) -> str:
        """
        Insert or replace the summary for `summary.resource_id`.

        Returns:
            The summary id

        Raises:
            StorageError: the write failed
        """
        try:
            await self.redis.set(self._key(summary.resource_id), summary.model_dump_json())
        except RedisError as e:
            logger.error(
                "Failed to upsert summary",
                resource_id=summary.resource_id,
                error=str(e),
            )
            raise StorageError(
                "The summary could not be saved.",
                details={"resource_id": summary.resource_id, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Upserted summary",
            resource_id=summary.resource_id,
            summary_id=summary.summary_id,
            text_length=len(summary.text),
        )
        return summary.summary_id

    async def get(self, resource_id: str) -> Optional[PersistedSummary]:
        """
        Fetch the summary for a meeting.

        Returns:
            PersistedSummary, or None when the meeting has no summary yet

        Raises:
            StorageError: the read failed
        """
        try:
            raw = await self.redis.get(self._key(resource_id))
        except RedisError as e:
            logger.error("Failed to read summary", resource_id=resource_id, error=str(e))
            raise StorageError(
                "The summary could not be loaded.",
                details={"resource_id": resource_id, "error_type": type(e).__name__},
            ) from e

        if raw is None:
            return None
        return PersistedSummary.model_validate_json(raw)

    async def delete(self, resource_id: str) -> bool:
        """Delete the summary for a meeting. Returns True if one existed."""
        try:
            deleted = await self.redis.delete(self._key(resource_id))
        except RedisError as e:
            raise StorageError(
                "The summary could not be deleted.",
                details={"resource_id": resource_id, "error_type": type(e).__name__},
            ) from e
        logger.info(
            "Deleted summary" if deleted else "Summary not found for deletion",
            resource_id=resource_id,
        )
        return bool(deleted)
