"""Persistence for tasks: the SQLAlchemy model, engine management and repository."""

from casework_tasks.database.models import Base, Task
from casework_tasks.database.orm_manager import ORMManager, get_orm_manager, reset_orm_manager

__all__ = [
    "Base",
    "Task",
    "ORMManager",
    "get_orm_manager",
    "reset_orm_manager",
]
