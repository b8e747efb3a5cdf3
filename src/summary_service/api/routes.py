"""
Summary endpoints.

- POST /summaries: generate (and unless dry-run, save) a meeting summary
- GET /summaries/{resource_id}: read the saved summary
- DELETE /summaries/{resource_id}: remove the saved summary
- GET /health: completion endpoint and Redis reachability
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from summary_service.api.dependencies import (
    get_completion_client,
    get_repository,
    get_pipeline,
    get_request_validator,
    get_requester_identity,
    get_settings,
)
from summary_service.api.error_handlers import failure_response
from summary_service.api.models import HealthResponse, StoredSummaryResponse, SummarizeBody
from summary_service.config import Settings
from summary_service.llm.base_client import BaseCompletionClient
from summary_service.models.output_models import SummaryFailureResponse, SummarySuccessResponse
from summary_service.persistence.redis_client import get_async_redis_client
from summary_service.persistence.repository import SummaryRepository
from summary_service.pipeline import SummarizationPipeline, to_response
from summary_service.validation.exceptions import MissingFieldError, ResourceNotFoundError
from summary_service.validation.request_validator import RequestValidator

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/summaries",
    response_model=SummarySuccessResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Summarize a meeting transcript",
    responses={
        400: {"model": SummaryFailureResponse, "description": "Missing field"},
        403: {"model": SummaryFailureResponse, "description": "Meeting belongs to another user"},
        404: {"model": SummaryFailureResponse, "description": "Meeting not found"},
        408: {"model": SummaryFailureResponse, "description": "Timed out"},
        422: {"model": SummaryFailureResponse, "description": "Summary failed quality validation"},
        429: {"model": SummaryFailureResponse, "description": "Rate limited (see Retry-After)"},
        500: {"model": SummaryFailureResponse, "description": "Credential, storage or unexpected error"},
        503: {"model": SummaryFailureResponse, "description": "Completion service unavailable"},
    },
)
async def create_summary(
    body: SummarizeBody,
    requester_identity: Optional[str] = Depends(get_requester_identity),
    pipeline: SummarizationPipeline = Depends(get_pipeline),
):
    """
    Run the summarization pipeline for one meeting.

    With dryRun=true the summary is returned but nothing is written.
    """
    outcome = await pipeline.run(
        resource_id=body.resource_id,
        content=body.content,
        dry_run=body.dry_run,
        requester_identity=requester_identity,
    )
    response = to_response(outcome)
    if isinstance(response, SummaryFailureResponse):
        return failure_response(response)
    return response


@router.get(
    "/summaries/{resource_id}",
    response_model=StoredSummaryResponse,
    response_model_by_alias=True,
    summary="Read the saved summary of a meeting",
    responses={
        403: {"model": SummaryFailureResponse},
        404: {"model": SummaryFailureResponse},
    },
)
async def read_summary(
    resource_id: str,
    requester_identity: Optional[str] = Depends(get_requester_identity),
    request_validator: RequestValidator = Depends(get_request_validator),
    repository: SummaryRepository = Depends(get_repository),
) -> StoredSummaryResponse:
    """Same existence and ownership checks as generation; no summary yet is NOT_FOUND."""
    if not requester_identity or not requester_identity.strip():
        raise MissingFieldError("requesterIdentity")

    await request_validator.check_access(resource_id, requester_identity)

    summary = await repository.get(resource_id)
    if summary is None:
        raise ResourceNotFoundError(resource_id, message="No summary has been saved for this meeting.")

    return StoredSummaryResponse(**summary.model_dump(exclude={"quality_attempts"}))


@router.delete(
    "/summaries/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove the saved summary of a meeting",
    responses={
        403: {"model": SummaryFailureResponse},
        404: {"model": SummaryFailureResponse},
    },
)
async def delete_summary(
    resource_id: str,
    requester_identity: Optional[str] = Depends(get_requester_identity),
    request_validator: RequestValidator = Depends(get_request_validator),
    repository: SummaryRepository = Depends(get_repository),
):
    if not requester_identity or not requester_identity.strip():
        raise MissingFieldError("requesterIdentity")

    await request_validator.check_access(resource_id, requester_identity)

    if not await repository.delete(resource_id):
        raise ResourceNotFoundError(resource_id, message="No summary has been saved for this meeting.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "All services healthy"},
        503: {"description": "One or more services unhealthy"},
    },
)
async def health_check(
    client: BaseCompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
):
    """Check the completion endpoint and Redis."""
    services = {}
    overall_healthy = True

    completion_ok = await client.health_check()
    services["completion"] = "healthy" if completion_ok else "unhealthy"
    overall_healthy = overall_healthy and completion_ok

    try:
        await get_async_redis_client(settings).ping()
        services["redis"] = "healthy"
    except (RedisError, OSError) as e:
        logger.warning("Redis health check failed", error=str(e))
        services["redis"] = "unhealthy"
        overall_healthy = False

    health = HealthResponse(
        status="healthy" if overall_healthy else "unhealthy",
        services=services,
        version=settings.APP_VERSION,
    )
    if not overall_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health.model_dump(mode="json"),
        )
    return health
