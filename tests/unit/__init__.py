"""
Unit tests for the Meeting Summary Service.

Test individual components in isolation:
- Completion client (error classification, Retry-After parsing)
- Transport retry engine and backoff policy
- Quality gate and output validation loop
- Request validation, persistence, audit logging
- Pipeline scenarios and response rendering
"""
