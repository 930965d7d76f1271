"""API routers."""

from casework_tasks.api.routers import health, tasks

__all__ = ["health", "tasks"]
