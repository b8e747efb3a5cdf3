"""
Meeting Summary Service.

Summarizes meeting transcripts through an external text-completion endpoint
and stores one accepted summary per meeting:
- Request validation (input shape, resource existence, ownership)
- Transport retries with exponential backoff and jitter
- Content-quality gate with its own retry budget
- Dry-run previews and idempotent upsert persistence
- Side-channel audit log for failures and dry runs

Architecture: FastAPI orchestrator + OpenAI-compatible completion API + Redis
"""

__version__ = "0.1.0"
