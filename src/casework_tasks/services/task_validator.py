"""
Task Validator - Storage-free validation of task input.

Each check returns a DomainResult so callers can run the whole pipeline
before touching the repository:
- Title presence and length
- Description length
- Status membership (case-insensitive, canonicalized to upper case)
- Due date not in the past (creation only)
"""

from datetime import datetime
from typing import Any, Dict, Optional

from casework_tasks.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from casework_tasks.domain.entities.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskDTO,
    TaskStatus,
    default_due_date,
    to_storage_datetime,
    utc_now,
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class TaskValidator:
    """
    Validates task fields for creation and updates.

    Validation order for a new task matches the order errors are reported:
    title, title length, description length, status, due date.
    """

    def validate_title(self, title: Optional[str]) -> DomainResult[str]:
        """Return the trimmed title, or a validation error."""
        if _is_blank(title):
            return DomainError.validation_error("Title is required", {"field": "title"})
        trimmed = title.strip()  # type: ignore[union-attr]
        if len(trimmed) > TITLE_MAX_LENGTH:
            return DomainError.validation_error(
                f"Title must not exceed {TITLE_MAX_LENGTH} characters",
                {"field": "title", "length": len(trimmed)},
            )
        return DomainSuccess.create(data=trimmed)

    def validate_description(self, description: Optional[str]) -> DomainResult[Optional[str]]:
        """Return the trimmed description (None stays None)."""
        if description is None:
            return DomainSuccess.create(data=None)
        trimmed = description.strip()
        if len(trimmed) > DESCRIPTION_MAX_LENGTH:
            return DomainError.validation_error(
                f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
                {"field": "description", "length": len(trimmed)},
            )
        return DomainSuccess.create(data=trimmed)

    def validate_status(self, status: Optional[str]) -> DomainResult[str]:
        """Return the canonical upper-case status, or a validation error."""
        if _is_blank(status):
            return DomainError.validation_error("Status cannot be empty", {"field": "status"})
        if not TaskStatus.is_valid(status):
            valid = ", ".join(TaskStatus.valid_statuses())
            return DomainError.validation_error(
                f"Invalid status: {status}. Valid statuses are: {valid}",
                {"field": "status", "value": status},
                [f"Use one of: {valid}"],
            )
        return DomainSuccess.create(data=status.upper())  # type: ignore[union-attr]

    def validate_due_date(
        self, due_date: Optional[datetime], now: Optional[datetime] = None
    ) -> DomainResult[datetime]:
        """
        Resolve the due date of a new task.

        Args:
            due_date: Requested due date; defaults to a week from ``now`` when None.
            now: Reference time (naive UTC). Defaults to the current time.

        Returns:
            DomainResult with the naive UTC due date, or a validation error when
            the date lies strictly in the past.
        """
        reference = now or utc_now()
        if due_date is None:
            return DomainSuccess.create(data=default_due_date(reference))
        normalized = to_storage_datetime(due_date)
        if normalized < reference:
            return DomainError.validation_error(
                "Due date cannot be in the past", {"field": "due_date"}
            )
        return DomainSuccess.create(data=normalized)

    def validate_new_task(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> DomainResult[TaskDTO]:
        """
        Run the creation pipeline and build an unsaved TaskDTO.

        The returned task has no ID or case number yet.
        """
        title_result = self.validate_title(title)
        if title_result.is_failure:
            return title_result

        description_result = self.validate_description(description)
        if description_result.is_failure:
            return description_result

        canonical_status = TaskStatus.PENDING.value
        if status is not None:
            status_result = self.validate_status(status)
            if status_result.is_failure:
                return status_result
            canonical_status = status_result.data  # type: ignore[assignment]

        due_result = self.validate_due_date(due_date, now)
        if due_result.is_failure:
            return due_result

        return DomainSuccess.create(
            data=TaskDTO(
                title=title_result.data,  # type: ignore[arg-type]
                description=description_result.data,
                status=canonical_status,
                due_date=due_result.data,
            )
        )

    def validate_changes(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> DomainResult[Dict[str, Any]]:
        """
        Build the change set for a partial update.

        A blank title or status is ignored, a non-null description is always
        applied (possibly as an empty string), and any due date is accepted,
        including one in the past.
        """
        changes: Dict[str, Any] = {}

        if not _is_blank(title):
            title_result = self.validate_title(title)
            if title_result.is_failure:
                return title_result
            changes["title"] = title_result.data

        if description is not None:
            description_result = self.validate_description(description)
            if description_result.is_failure:
                return description_result
            changes["description"] = description_result.data

        if not _is_blank(status):
            status_result = self.validate_status(status)
            if status_result.is_failure:
                return status_result
            changes["status"] = status_result.data

        if due_date is not None:
            changes["due_date"] = to_storage_datetime(due_date)

        return DomainSuccess.create(data=changes)
