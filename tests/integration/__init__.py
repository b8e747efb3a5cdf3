"""
Integration tests for the Meeting Summary Service.

Test components together or against real external services:
- API endpoints (FastAPI TestClient, dependencies overridden with fakes)
- Redis persistence and audit list (real Redis, marked with @pytest.mark.integration)
"""
