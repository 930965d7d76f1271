"""Task Repository Interface."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from casework_tasks.domain.entities.result_types import DomainResult
from casework_tasks.domain.entities.task import TaskDTO


class ITaskRepository(Protocol):
    """Protocol for task repository operations."""

    def save(self, task: TaskDTO) -> DomainResult[TaskDTO]:
        """Insert a new task or overwrite an existing one."""
        ...

    def update(self, task_id: int, changes: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """Apply field changes to a task in a single transaction."""
        ...

    def find_by_id(self, task_id: int) -> DomainResult[Optional[TaskDTO]]:
        """Get task by ID, or None."""
        ...

    def exists_by_id(self, task_id: int) -> DomainResult[bool]:
        """Check whether a task ID exists."""
        ...

    def delete_by_id(self, task_id: int) -> DomainResult[Dict[str, Any]]:
        """Delete a task by ID."""
        ...

    def find_by_case_number(self, case_number: Optional[str]) -> DomainResult[Optional[TaskDTO]]:
        """Get task by case number, or None."""
        ...

    def exists_by_case_number(self, case_number: Optional[str]) -> DomainResult[bool]:
        """Check whether a case number is already taken."""
        ...

    def find_by_status(self, status: str) -> DomainResult[List[TaskDTO]]:
        """Tasks with a status (case-insensitive), newest first."""
        ...

    def find_due_before(self, timestamp: datetime) -> DomainResult[List[TaskDTO]]:
        """Tasks due before a timestamp, soonest first."""
        ...

    def find_overdue(self, as_of: datetime) -> DomainResult[List[TaskDTO]]:
        """Tasks due before ``as_of`` that are not completed."""
        ...

    def find_created_between(
        self, start: datetime, end: datetime
    ) -> DomainResult[List[TaskDTO]]:
        """Tasks created within an inclusive range, newest first."""
        ...

    def search(self, term: str) -> DomainResult[List[TaskDTO]]:
        """Substring search over title, description and case number."""
        ...

    def search_paginated(
        self,
        term: Optional[str],
        status: Optional[str],
        offset: int,
        limit: int,
    ) -> DomainResult[List[TaskDTO]]:
        """Filtered page of tasks ordered by due date descending."""
        ...

    def count_filtered(self, term: Optional[str], status: Optional[str]) -> DomainResult[int]:
        """Count tasks matching the same filters as search_paginated."""
        ...

    def count(self) -> DomainResult[int]:
        """Count all tasks."""
        ...

    def count_by_status(self) -> DomainResult[Dict[str, int]]:
        """Task counts grouped by status."""
        ...

    def find_all_ordered_by_due_date_desc(self) -> DomainResult[List[TaskDTO]]:
        """All tasks ordered by due date descending."""
        ...

    def find_all_paginated(self, offset: int, limit: int) -> DomainResult[List[TaskDTO]]:
        """Page of all tasks ordered by due date descending."""
        ...
