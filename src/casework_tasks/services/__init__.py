"""Service layer - Business logic orchestration."""

from casework_tasks.services.case_number_sequence import CaseNumberSequence
from casework_tasks.services.service_factory import (
    ServiceFactory,
    get_service_factory,
    reset_service_factory,
)
from casework_tasks.services.task_service import TaskService
from casework_tasks.services.task_validator import TaskValidator

__all__ = [
    "CaseNumberSequence",
    "TaskService",
    "TaskValidator",
    "ServiceFactory",
    "get_service_factory",
    "reset_service_factory",
]
