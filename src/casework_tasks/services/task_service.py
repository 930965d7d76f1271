"""
Task Service - Business logic for task operations.

Provides high-level task operations with proper error handling
and orchestration of repository calls.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from casework_tasks.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
)
from casework_tasks.domain.entities.task import (
    TaskDTO,
    TaskStatus,
    to_storage_datetime,
    utc_now,
)
from casework_tasks.domain.interfaces.task_repository import ITaskRepository
from casework_tasks.services.case_number_sequence import CaseNumberSequence
from casework_tasks.services.task_validator import TaskValidator

logger = logging.getLogger(__name__)

MAX_CASE_NUMBER_ATTEMPTS = 5


def _normalize(value: Optional[str]) -> Optional[str]:
    """Trim a filter value; blank becomes None."""
    if value is None or not value.strip():
        return None
    return value.strip()


class TaskService:
    """
    Service for task business logic.

    Validates input before any repository call, allocates case numbers and
    translates lookups that come back empty into NOT_FOUND results.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        case_numbers: Optional[CaseNumberSequence] = None,
        validator: Optional[TaskValidator] = None,
    ):
        """Initialize service with the task repository and case-number sequence."""
        self.task_repo = task_repo
        self.case_numbers = case_numbers or CaseNumberSequence()
        self.validator = validator or TaskValidator()

    # --- Helper Methods ---

    def _next_case_number(self) -> DomainResult[str]:
        """Take sequence values until one is not already stored."""
        while True:
            candidate = self.case_numbers.next_case_number()
            exists_result = self.task_repo.exists_by_case_number(candidate)
            if exists_result.is_failure:
                return exists_result
            if not exists_result.data:
                return DomainSuccess.create(data=candidate)
            logger.debug("Case number %s already taken, skipping", candidate)

    def _require_task(self, task_id: int) -> DomainResult[TaskDTO]:
        result = self.task_repo.find_by_id(task_id)
        if result.is_failure:
            return result
        if result.data is None:
            return DomainError.not_found("Task", task_id)
        return result

    # --- Create ---

    def create_task(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> DomainResult[TaskDTO]:
        """
        Create a new task.

        Args:
            title: Task title (required, trimmed, at most 255 characters)
            description: Optional description (trimmed)
            status: Optional status, case-insensitive; defaults to PENDING
            due_date: Optional due date, must not be in the past; defaults to now + 7 days

        Returns:
            DomainResult with the created task.
        """
        validation = self.validator.validate_new_task(title, description, status, due_date)
        if validation.is_failure:
            return validation
        task: TaskDTO = validation.data  # type: ignore[assignment]

        for attempt in range(1, MAX_CASE_NUMBER_ATTEMPTS + 1):
            number_result = self._next_case_number()
            if number_result.is_failure:
                return number_result
            task.case_number = number_result.data

            result = self.task_repo.save(task)
            if result.is_success:
                logger.info("Created task %s (id=%s)", result.data.case_number, result.data.id)  # type: ignore[union-attr]
                return result
            if result.error_type != DomainErrorType.ALREADY_EXISTS:
                return result

            logger.warning(
                "Case number %s collided on insert (attempt %d of %d)",
                task.case_number,
                attempt,
                MAX_CASE_NUMBER_ATTEMPTS,
            )

        return DomainError.create(
            DomainErrorType.ALREADY_EXISTS,
            f"Could not allocate a unique case number after {MAX_CASE_NUMBER_ATTEMPTS} attempts",
            {"last_case_number": task.case_number, "attempts": MAX_CASE_NUMBER_ATTEMPTS},
            ["Retry the request"],
        )

    # --- Queries ---

    def search_tasks(
        self,
        search: Optional[str],
        status: Optional[str],
        offset: int,
        page_size: int,
    ) -> DomainResult[List[TaskDTO]]:
        """
        Page of tasks matching the optional search term and status.

        Blank search and status values are treated as absent.
        """
        return self.task_repo.search_paginated(
            _normalize(search), _normalize(status), offset, page_size
        )

    def search_all_tasks(self, search: Optional[str]) -> DomainResult[List[TaskDTO]]:
        """All tasks matching ``search``; a blank term returns every task."""
        term = _normalize(search)
        if term is None:
            return self.get_all_tasks()
        return self.task_repo.search(term)

    def get_all_tasks(self) -> DomainResult[List[TaskDTO]]:
        return self.task_repo.find_all_ordered_by_due_date_desc()

    def count_all_tasks(self) -> DomainResult[int]:
        return self.task_repo.count()

    def count_filtered_tasks(
        self, search: Optional[str], status: Optional[str]
    ) -> DomainResult[int]:
        """Count tasks with the same filter rules as search_tasks."""
        term, status_filter = _normalize(search), _normalize(status)
        if term is None and status_filter is None:
            return self.task_repo.count()
        return self.task_repo.count_filtered(term, status_filter)

    def get_task_by_id(self, task_id: int) -> DomainResult[TaskDTO]:
        """Get a task by ID, NOT_FOUND when it does not exist."""
        return self._require_task(task_id)

    def find_task_by_id(self, task_id: int) -> Optional[TaskDTO]:
        """Get a task by ID, or None when it does not exist."""
        return self.task_repo.find_by_id(task_id).get_data_or_raise()

    def get_task_by_case_number(self, case_number: Optional[str]) -> DomainResult[TaskDTO]:
        result = self.task_repo.find_by_case_number(case_number)
        if result.is_failure:
            return result
        if result.data is None:
            return DomainError.not_found("Task", case_number, field_label="case number")
        return result

    def get_tasks_by_status(self, status: str) -> DomainResult[List[TaskDTO]]:
        return self.task_repo.find_by_status(status)

    def get_tasks_due_before(self, date: datetime) -> DomainResult[List[TaskDTO]]:
        return self.task_repo.find_due_before(to_storage_datetime(date))

    def get_tasks_created_between(
        self, start: datetime, end: datetime
    ) -> DomainResult[List[TaskDTO]]:
        return self.task_repo.find_created_between(
            to_storage_datetime(start), to_storage_datetime(end)
        )

    def get_overdue_tasks(self) -> DomainResult[List[TaskDTO]]:
        """Tasks due before now that are not COMPLETED."""
        return self.task_repo.find_overdue(utc_now())

    def get_task_statistics(self) -> DomainResult[Dict[str, int]]:
        """
        Summary counts.

        Returns:
            DomainResult with ``total``, one lower-cased key per status that has
            tasks, and ``overdue``.
        """
        total_result = self.task_repo.count()
        if total_result.is_failure:
            return total_result
        by_status_result = self.task_repo.count_by_status()
        if by_status_result.is_failure:
            return by_status_result
        overdue_result = self.task_repo.find_overdue(utc_now())
        if overdue_result.is_failure:
            return overdue_result

        stats: Dict[str, int] = {"total": total_result.data}  # type: ignore[dict-item]
        for status, count in (by_status_result.data or {}).items():
            stats[status.lower()] = count
        stats["overdue"] = len(overdue_result.data or [])
        return DomainSuccess.create(data=stats)

    def get_valid_statuses(self) -> DomainResult[List[str]]:
        return DomainSuccess.create(data=TaskStatus.valid_statuses())

    # --- Mutations ---

    def update_task_status(self, task_id: int, status: Optional[str]) -> DomainResult[TaskDTO]:
        """
        Change a task's status.

        Args:
            task_id: Task ID
            status: New status, case-insensitive

        Returns:
            DomainResult with the updated task.
        """
        status_result = self.validator.validate_status(status)
        if status_result.is_failure:
            return status_result

        result = self.task_repo.update(task_id, {"status": status_result.data})
        if result.is_success:
            logger.info("Task %s status set to %s", task_id, status_result.data)
        return result

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> DomainResult[TaskDTO]:
        """
        Partially update a task.

        Only supplied values are applied; past due dates are accepted here.
        """
        changes_result = self.validator.validate_changes(title, description, status, due_date)
        if changes_result.is_failure:
            return changes_result

        changes: Dict[str, Any] = changes_result.data or {}
        result = self.task_repo.update(task_id, changes)
        if result.is_success:
            logger.info("Updated task %s fields: %s", task_id, sorted(changes))
        return result

    def delete_task(self, task_id: int) -> DomainResult[Dict[str, Any]]:
        """Delete a task, NOT_FOUND when it does not exist."""
        exists_result = self.task_repo.exists_by_id(task_id)
        if exists_result.is_failure:
            return exists_result
        if not exists_result.data:
            return DomainError.not_found("Task", task_id)

        result = self.task_repo.delete_by_id(task_id)
        if result.is_success:
            logger.info("Deleted task %s", task_id)
        return result
