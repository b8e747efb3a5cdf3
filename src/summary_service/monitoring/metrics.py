"""Custom Prometheus metrics for the Meeting Summary Service.

These metrics are exposed at the /metrics endpoint. Alert rules should watch:
- completion_attempts_total (rising rate_limited / server_error share)
- quality_rejections_total (model drifting toward short or empty summaries)
- summaries_total{outcome!="persisted"} (failed invocations)
"""

from prometheus_client import Counter, Histogram

# === Completion Metrics ===

completion_attempts_total = Counter(
    "completion_attempts_total",
    "Completion endpoint attempts by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: success, or the ErrorKind value of the failed attempt
  (rate_limited, timeout, server_error, network_error, ...)
"""

completion_latency_seconds = Histogram(
    "completion_latency_seconds",
    "Completion endpoint latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)

completion_tokens_total = Counter(
    "completion_tokens_total",
    "Tokens consumed by model and type",
    ["model", "token_type"],
)

transport_retries_total = Counter(
    "transport_retries_total",
    "Transport retries scheduled by the error kind that caused them",
    ["error_kind"],
)

# === Quality Metrics ===

quality_rejections_total = Counter(
    "quality_rejections_total",
    "Generated outputs rejected by the quality gate",
    ["reason"],
)

# === Pipeline Metrics ===

summaries_total = Counter(
    "summaries_total",
    "Summarization invocations by terminal state",
    ["outcome"],
)
"""
Labels:
- outcome: PipelineState value of the terminal state
  (persisted, dry_run_complete, input_rejected, generation_failed, ...)
"""

summary_duration_seconds = Histogram(
    "summary_duration_seconds",
    "End-to-end summarization duration in seconds",
    ["dry_run"],
)

audit_failures_total = Counter(
    "audit_failures_total",
    "Audit observer failures (swallowed)",
    ["observer"],
)
