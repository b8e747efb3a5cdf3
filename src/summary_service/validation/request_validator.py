"""
Request validation.

Order of checks:
1. Required fields present and non-blank (no external calls)
2. Meeting exists
3. Meeting belongs to the requester

Existence and ownership are separate checks so callers can tell NOT_FOUND
from ACCESS_DENIED.
"""

from typing import Optional

import structlog

from summary_service.models.input_models import GenerationRequest
from summary_service.persistence.directory import ResourceDirectory
from summary_service.validation.exceptions import (
    AccessDeniedError,
    MissingFieldError,
    ResourceNotFoundError,
)

logger = structlog.get_logger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class RequestValidator:
    """
    Turns raw request fields into a GenerationRequest or raises an InputError.

    Raises StorageError (unchanged) when the directory cannot be queried.
    """

    def __init__(self, directory: ResourceDirectory):
        self.directory = directory

    async def validate(
        self,
        resource_id: Optional[str],
        content: Optional[str],
        dry_run: bool,
        requester_identity: Optional[str],
    ) -> GenerationRequest:
        if _blank(resource_id):
            raise MissingFieldError("resourceId")
        if _blank(content):
            raise MissingFieldError("content")
        if _blank(requester_identity):
            raise MissingFieldError("requesterIdentity")

        await self.check_access(resource_id, requester_identity)

        return GenerationRequest(
            resource_id=resource_id,
            content=content,
            dry_run=dry_run,
            requester_identity=requester_identity,
        )

    async def check_access(self, resource_id: str, requester_identity: str) -> None:
        """Raise unless `requester_identity` owns an existing `resource_id`."""
        owner = await self.directory.get_owner(resource_id)
        if owner is None:
            logger.info("Meeting not found", resource_id=resource_id)
            raise ResourceNotFoundError(resource_id)
        if owner != requester_identity:
            logger.warning(
                "Meeting access denied",
                resource_id=resource_id,
                requester_identity=requester_identity,
            )
            raise AccessDeniedError(resource_id, requester_identity)
