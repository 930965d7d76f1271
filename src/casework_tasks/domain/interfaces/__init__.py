"""Domain interfaces - Protocol-based repository contracts."""

from casework_tasks.domain.interfaces.task_repository import ITaskRepository

__all__ = [
    "ITaskRepository",
]
