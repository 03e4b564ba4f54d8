"""
App entry point.

Re-exports the FastAPI `app` from `portfolio.api.main` so the service can be
started with `uvicorn app:app`.
"""

from portfolio.api.main import app  # noqa: F401
