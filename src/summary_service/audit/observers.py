"""
Audit observers.

An observer receives AuditEvents and writes them somewhere. Observers may
raise; the AuditLogger contains their failures.
"""

from typing import Protocol

import structlog
from redis.asyncio import Redis as AsyncRedis

from summary_service.audit.models import AuditEvent

logger = structlog.get_logger(__name__)


class AuditObserver(Protocol):
    async def record(self, event: AuditEvent) -> None:
        ...


class StructlogAuditObserver:
    """Emits each event as one structured log line."""

    EVENT_NAME = "summary_eval_log"

    async def record(self, event: AuditEvent) -> None:
        logger.info(self.EVENT_NAME, **event.model_dump(mode="json"))


class RedisAuditObserver:
    """
    Appends events to a capped Redis list (newest first).

    Storage: list `key`, JSON entries, trimmed to `max_entries`.
    """

    def __init__(self, redis_client: AsyncRedis, key: str = "audit:summary", max_entries: int = 10000):
        self.redis = redis_client
        self.key = key
        self.max_entries = max_entries

    async def record(self, event: AuditEvent) -> None:
        await self.redis.lpush(self.key, event.model_dump_json())
        await self.redis.ltrim(self.key, 0, self.max_entries - 1)
