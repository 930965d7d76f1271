"""Database models."""

from casework_tasks.database.models.base import Base, get_current_timestamp
from casework_tasks.database.models.task import Task

__all__ = [
    "Base",
    "get_current_timestamp",
    "Task",
]
