"""
Task Repository.

SQLAlchemy ORM-based repository for task operations.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement

from casework_tasks.database.models.task import Task
from casework_tasks.database.orm_manager import ORMManager, get_orm_manager
from casework_tasks.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from casework_tasks.domain.entities.task import TaskDTO, TaskStatus, utc_now
from casework_tasks.error_sanitizer import sanitize_exception

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "due_date")


def _search_clause(term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on title, description or case number."""
    pattern = term.lower()
    return or_(
        func.lower(Task.title).contains(pattern, autoescape=True),
        func.lower(Task.description).contains(pattern, autoescape=True),
        func.lower(Task.case_number).contains(pattern, autoescape=True),
    )


def _status_clause(status: str) -> ColumnElement[bool]:
    return func.lower(Task.status) == status.lower()


def _is_case_number_conflict(error: IntegrityError) -> bool:
    """True when the unique constraint on case_number was violated."""
    message = str(error.orig).lower()
    return "unique" in message and "case_number" in message


class TaskRepository:
    """
    Task repository using SQLAlchemy ORM.

    Provides CRUD and query operations for tasks with proper error handling
    via DomainResult pattern.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize repository with ORM manager.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self.orm_manager = orm_manager or get_orm_manager()

    def _to_dto(self, task: Task) -> TaskDTO:
        """Convert Task model to TaskDTO."""
        return TaskDTO(
            id=task.id,
            case_number=task.case_number,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            created_date=task.created_date,
            updated_date=task.updated_date,
        )

    def _failed(self, operation: str, error: Exception) -> DomainResult[Any]:
        reason = sanitize_exception(error)
        logger.error("Task repository operation %s failed: %s", operation, reason)
        return DomainError.operation_failed(operation, reason)

    def _list(self, operation: str, query: Any) -> DomainResult[List[TaskDTO]]:
        try:
            with self.orm_manager.get_session() as session:
                tasks = session.execute(query).scalars().all()
                return DomainSuccess.create(data=[self._to_dto(t) for t in tasks])
        except Exception as e:
            return self._failed(operation, e)

    def save(self, task: TaskDTO) -> DomainResult[TaskDTO]:
        """
        Insert a new task, or overwrite the mutable fields of an existing one.

        Args:
            task: Task to persist. Inserted when ``task.id`` is None.

        Returns:
            DomainResult with the persisted task, ALREADY_EXISTS when the case
            number is taken, or NOT_FOUND when updating a missing ID.
        """
        try:
            with self.orm_manager.get_session() as session:
                now = utc_now()
                if task.id is None:
                    model = Task(
                        case_number=task.case_number,
                        title=task.title,
                        description=task.description,
                        status=task.status,
                        due_date=task.due_date,
                        created_date=now,
                        updated_date=now,
                    )
                    session.add(model)
                else:
                    model = session.get(Task, task.id)
                    if model is None:
                        return DomainError.not_found("Task", task.id)
                    model.title = task.title
                    model.description = task.description
                    model.status = task.status
                    model.due_date = task.due_date
                    model.updated_date = now

                session.flush()
                return DomainSuccess.create(data=self._to_dto(model))

        except IntegrityError as e:
            if not _is_case_number_conflict(e):
                return self._failed("save_task", e)
            logger.warning("Case number %s rejected by storage: %s", task.case_number, e.orig)
            return DomainError.already_exists("Case number", str(task.case_number))
        except Exception as e:
            return self._failed("save_task", e)

    def update(self, task_id: int, changes: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """
        Apply field changes to a task inside one session.

        Args:
            task_id: Task ID.
            changes: Mapping of field name to new value (title, description, status, due_date).

        Returns:
            DomainResult with updated task data.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.get(Task, task_id)

                if not task:
                    return DomainError.not_found("Task", task_id)

                for field, value in changes.items():
                    if field in UPDATABLE_FIELDS:
                        setattr(task, field, value)
                task.updated_date = utc_now()

                session.flush()
                return DomainSuccess.create(data=self._to_dto(task))

        except Exception as e:
            return self._failed("update_task", e)

    def find_by_id(self, task_id: int) -> DomainResult[Optional[TaskDTO]]:
        """Get task by ID; data is None when it does not exist."""
        try:
            with self.orm_manager.get_session() as session:
                task = session.get(Task, task_id)
                return DomainSuccess.create(data=self._to_dto(task) if task else None)
        except Exception as e:
            return self._failed("find_task", e)

    def exists_by_id(self, task_id: int) -> DomainResult[bool]:
        """Check whether a task ID exists."""
        try:
            with self.orm_manager.get_session() as session:
                found = session.execute(
                    select(Task.id).where(Task.id == task_id)
                ).scalar_one_or_none()
                return DomainSuccess.create(data=found is not None)
        except Exception as e:
            return self._failed("exists_task", e)

    def delete_by_id(self, task_id: int) -> DomainResult[Dict[str, Any]]:
        """
        Delete a task.

        Args:
            task_id: Task ID.

        Returns:
            DomainResult with deletion confirmation.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.get(Task, task_id)

                if not task:
                    return DomainError.not_found("Task", task_id)

                case_number = task.case_number
                session.delete(task)
                session.flush()

                return DomainSuccess.create(
                    data={
                        "task_id": task_id,
                        "case_number": case_number,
                        "message": f"Task {task_id} deleted successfully",
                    }
                )

        except Exception as e:
            return self._failed("delete_task", e)

    def find_by_case_number(self, case_number: Optional[str]) -> DomainResult[Optional[TaskDTO]]:
        """Get task by case number; None case numbers are simply not found."""
        if case_number is None:
            return DomainSuccess.create(data=None)
        try:
            with self.orm_manager.get_session() as session:
                task = session.execute(
                    select(Task).where(Task.case_number == case_number)
                ).scalar_one_or_none()
                return DomainSuccess.create(data=self._to_dto(task) if task else None)
        except Exception as e:
            return self._failed("find_task_by_case_number", e)

    def exists_by_case_number(self, case_number: Optional[str]) -> DomainResult[bool]:
        """Check whether a case number is already taken."""
        if case_number is None:
            return DomainSuccess.create(data=False)
        try:
            with self.orm_manager.get_session() as session:
                found = session.execute(
                    select(Task.id).where(Task.case_number == case_number)
                ).scalar_one_or_none()
                return DomainSuccess.create(data=found is not None)
        except Exception as e:
            return self._failed("exists_case_number", e)

    def find_by_status(self, status: str) -> DomainResult[List[TaskDTO]]:
        """Tasks with the given status (case-insensitive), newest first."""
        query = (
            select(Task)
            .where(_status_clause(status))
            .order_by(Task.created_date.desc(), Task.id.desc())
        )
        return self._list("find_tasks_by_status", query)

    def find_due_before(self, timestamp: datetime) -> DomainResult[List[TaskDTO]]:
        """Tasks due strictly before ``timestamp``, soonest first."""
        query = select(Task).where(Task.due_date < timestamp).order_by(Task.due_date.asc())
        return self._list("find_tasks_due_before", query)

    def find_overdue(self, as_of: datetime) -> DomainResult[List[TaskDTO]]:
        """Tasks due before ``as_of`` whose status is not exactly COMPLETED."""
        query = (
            select(Task)
            .where(Task.due_date < as_of, Task.status != TaskStatus.COMPLETED.value)
            .order_by(Task.due_date.asc())
        )
        return self._list("find_overdue_tasks", query)

    def find_created_between(
        self, start: datetime, end: datetime
    ) -> DomainResult[List[TaskDTO]]:
        """Tasks created in the inclusive range [start, end], newest first."""
        query = (
            select(Task)
            .where(Task.created_date >= start, Task.created_date <= end)
            .order_by(Task.created_date.desc(), Task.id.desc())
        )
        return self._list("find_tasks_created_between", query)

    def search(self, term: str) -> DomainResult[List[TaskDTO]]:
        """Substring search; an empty term matches every task."""
        return self._list("search_tasks", select(Task).where(_search_clause(term)))

    def search_paginated(
        self,
        term: Optional[str],
        status: Optional[str],
        offset: int,
        limit: int,
    ) -> DomainResult[List[TaskDTO]]:
        """
        Filtered page of tasks ordered by due date descending.

        Args:
            term: Substring filter, skipped when None.
            status: Exact case-insensitive status filter, skipped when None.
            offset: Number of rows to skip.
            limit: Maximum number of rows; 0 returns nothing.

        Returns:
            DomainResult with list of task DTOs.
        """
        query = select(Task)
        if term is not None:
            query = query.where(_search_clause(term))
        if status is not None:
            query = query.where(_status_clause(status))
        query = (
            query.order_by(Task.due_date.desc(), Task.id.desc())
            .offset(max(offset, 0))
            .limit(max(limit, 0))
        )
        return self._list("search_tasks_paginated", query)

    def count_filtered(self, term: Optional[str], status: Optional[str]) -> DomainResult[int]:
        """Count tasks matching the search_paginated filters."""
        query = select(func.count(Task.id))
        if term is not None:
            query = query.where(_search_clause(term))
        if status is not None:
            query = query.where(_status_clause(status))
        try:
            with self.orm_manager.get_session() as session:
                return DomainSuccess.create(data=int(session.execute(query).scalar_one()))
        except Exception as e:
            return self._failed("count_filtered_tasks", e)

    def count(self) -> DomainResult[int]:
        """Count all tasks."""
        return self.count_filtered(None, None)

    def count_by_status(self) -> DomainResult[Dict[str, int]]:
        """Task counts grouped by stored status."""
        try:
            with self.orm_manager.get_session() as session:
                rows = session.execute(
                    select(Task.status, func.count(Task.id)).group_by(Task.status)
                ).all()
                return DomainSuccess.create(data={status: int(count) for status, count in rows})
        except Exception as e:
            return self._failed("count_tasks_by_status", e)

    def find_all_ordered_by_due_date_desc(self) -> DomainResult[List[TaskDTO]]:
        """All tasks ordered by due date descending."""
        query = select(Task).order_by(Task.due_date.desc(), Task.id.desc())
        return self._list("list_tasks", query)

    def find_all_paginated(self, offset: int, limit: int) -> DomainResult[List[TaskDTO]]:
        """Page of all tasks ordered by due date descending."""
        return self.search_paginated(None, None, offset, limit)
