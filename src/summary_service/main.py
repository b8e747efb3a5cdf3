"""
FastAPI application entry point for the Meeting Summary Service.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from summary_service.api.dependencies import (
    get_audit_logger,
    get_completion_client,
    get_prompt_builder,
)
from summary_service.api.error_handlers import EXCEPTION_HANDLERS
from summary_service.api.middleware import RequestTracingMiddleware
from summary_service.api.routes import router
from summary_service.config import settings
from summary_service.logging_config import configure_logging
from summary_service.persistence.redis_client import RedisClient

# Configure structured logging before the app is built
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Summarizes meeting transcripts with a text-completion model and saves one summary per meeting",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["summaries"])


@app.on_event("startup")
async def startup():
    """Application startup - load templates and probe the completion endpoint."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        completion_base_url=settings.COMPLETION_BASE_URL,
        model=settings.COMPLETION_MODEL,
        prompt_version=settings.PROMPT_VERSION,
    )

    # Fails fast on missing templates
    builder = get_prompt_builder()
    logger.info("Prompt templates loaded", path=str(builder.templates_dir))

    if await get_completion_client().health_check():
        logger.info("Completion endpoint reachable")
    else:
        logger.warning("Completion endpoint not reachable at startup")

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - flush audit events, close connections."""
    logger.info("Application shutdown")
    await get_audit_logger().drain()
    await get_completion_client().close()
    await RedisClient.close_async_pool()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "summary_service.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )
