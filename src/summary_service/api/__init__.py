"""
FastAPI API routes and endpoints.

- routes.py: POST /summaries, GET /summaries/{resource_id}, GET /health
- dependencies.py: Dependency injection for the client, Redis, audit and pipeline
- models.py: API-specific request/response models
- error_handlers.py: Failure rendering and exception handlers
- middleware.py: Request tracing
"""

from summary_service.api import dependencies, error_handlers, models
from summary_service.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
