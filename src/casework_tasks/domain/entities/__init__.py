"""Domain entities - Data Transfer Objects."""

from casework_tasks.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
    DuplicateCaseNumberError,
    InvalidTaskArgumentError,
    TaskNotFoundError,
    TaskOperationError,
    TaskServiceError,
)
from casework_tasks.domain.entities.task import TaskDTO, TaskStatus

__all__ = [
    "DomainError",
    "DomainErrorType",
    "DomainResult",
    "DomainSuccess",
    "DuplicateCaseNumberError",
    "InvalidTaskArgumentError",
    "TaskNotFoundError",
    "TaskOperationError",
    "TaskServiceError",
    "TaskDTO",
    "TaskStatus",
]
