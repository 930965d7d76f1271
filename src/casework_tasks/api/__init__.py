"""REST API - FastAPI application, routers and error handling."""

from casework_tasks.api.app import create_app

__all__ = ["create_app"]
