"""
Service Factory - Dependency injection for services.

Provides a centralized factory for creating service instances with
proper dependency injection.
"""

from __future__ import annotations

import threading
from typing import Optional

from casework_tasks.config import Settings
from casework_tasks.database.orm_manager import ORMManager, get_orm_manager
from casework_tasks.database.repositories import TaskRepository
from casework_tasks.services.case_number_sequence import CaseNumberSequence
from casework_tasks.services.task_service import TaskService

# Module-level singleton
_global_factory: Optional["ServiceFactory"] = None
_global_lock = threading.Lock()


def get_service_factory(
    orm_manager: Optional[ORMManager] = None,
    case_number_start: Optional[int] = None,
) -> "ServiceFactory":
    """
    Get the singleton service factory instance.

    Arguments only apply when the singleton is first created.

    Args:
        orm_manager: Optional ORM manager instance. Uses singleton if not provided.
        case_number_start: Optional first case-number value.

    Returns:
        ServiceFactory singleton instance.
    """
    global _global_factory

    with _global_lock:
        if _global_factory is None:
            _global_factory = ServiceFactory(orm_manager, case_number_start)
        return _global_factory


def reset_service_factory() -> None:
    """Reset the global service factory (for testing)."""
    global _global_factory

    with _global_lock:
        _global_factory = None


class ServiceFactory:
    """
    Factory for creating service instances with dependency injection.

    Creates and caches the repository, the case-number sequence and the
    task service so every caller in the process shares them.
    """

    def __init__(
        self,
        orm_manager: Optional[ORMManager] = None,
        case_number_start: Optional[int] = None,
    ):
        """
        Initialize the service factory.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
            case_number_start: First case-number value. Read from the environment if not provided.
        """
        self._orm_manager = orm_manager or get_orm_manager()
        if case_number_start is None:
            case_number_start = Settings.from_env().case_number_start
        self._case_number_start = case_number_start
        self._lock = threading.RLock()  # RLock allows reentrant locking

        self._task_repo: Optional[TaskRepository] = None
        self._case_numbers: Optional[CaseNumberSequence] = None
        self._task_service: Optional[TaskService] = None

    @property
    def orm_manager(self) -> ORMManager:
        """Get the ORM manager."""
        return self._orm_manager

    def get_task_repository(self) -> TaskRepository:
        """Get or create the task repository."""
        with self._lock:
            if self._task_repo is None:
                self._task_repo = TaskRepository(self._orm_manager)
            return self._task_repo

    def get_case_number_sequence(self) -> CaseNumberSequence:
        """Get or create the process-wide case-number sequence."""
        with self._lock:
            if self._case_numbers is None:
                self._case_numbers = CaseNumberSequence(start=self._case_number_start)
            return self._case_numbers

    def get_task_service(self) -> TaskService:
        """Get or create the task service."""
        with self._lock:
            if self._task_service is None:
                self._task_service = TaskService(
                    task_repo=self.get_task_repository(),
                    case_numbers=self.get_case_number_sequence(),
                )
            return self._task_service
