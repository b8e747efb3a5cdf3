"""Monitoring and metrics instrumentation for the Meeting Summary Service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from summary_service.monitoring.metrics import (
    audit_failures_total,
    completion_attempts_total,
    completion_latency_seconds,
    completion_tokens_total,
    quality_rejections_total,
    summaries_total,
    summary_duration_seconds,
    transport_retries_total,
)

__all__ = [
    "audit_failures_total",
    "completion_attempts_total",
    "completion_latency_seconds",
    "completion_tokens_total",
    "quality_rejections_total",
    "summaries_total",
    "summary_duration_seconds",
    "transport_retries_total",
]
