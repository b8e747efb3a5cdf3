"""
Audit logging for dry runs and terminal failures.

The AuditLogger is injected into the pipeline; observers decide where events
go (structured log, capped Redis list).
"""

from summary_service.audit.logger import AuditLogger
from summary_service.audit.models import AuditEvent
from summary_service.audit.observers import (
    AuditObserver,
    RedisAuditObserver,
    StructlogAuditObserver,
)

__all__ = [
    "AuditEvent",
    "AuditLogger",
    "AuditObserver",
    "RedisAuditObserver",
    "StructlogAuditObserver",
]
