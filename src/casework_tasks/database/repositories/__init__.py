"""Database repositories."""

from casework_tasks.database.repositories.task_repository import TaskRepository

__all__ = [
    "TaskRepository",
]
