"""
Task Domain Entity (DTO).

Data Transfer Object for the Task entity, providing a clean interface between
the application layer and database layer.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

CASE_NUMBER_PREFIX = "TASK"
CASE_NUMBER_DIGITS = 6
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
DEFAULT_DUE_DAYS = 7


class TaskStatus(str, Enum):
    """Canonical task statuses, in display order."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ON_HOLD = "ON_HOLD"

    @classmethod
    def is_valid(cls, value: Optional[str]) -> bool:
        """Check a status string case-insensitively."""
        if value is None:
            return False
        return value.upper() in cls.__members__

    @classmethod
    def valid_statuses(cls) -> List[str]:
        """Return the canonical status names in declaration order."""
        return [status.value for status in cls]


def utc_now() -> datetime:
    """Current time as a naive UTC timestamp (the storage representation)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_datetime(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC.

    Aware values are converted to UTC; naive values are taken as UTC already.
    """
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def default_due_date(now: Optional[datetime] = None) -> datetime:
    """Due date used when a task is created without one."""
    return (now or utc_now()) + timedelta(days=DEFAULT_DUE_DAYS)


@dataclass
class TaskDTO:
    """
    Task Data Transfer Object.

    Represents a task in the domain layer without ORM dependencies.

    Attributes:
        id: Storage-generated integer identifier (None until persisted)
        case_number: Generated human-readable identifier, e.g. TASK000001
        title: Task title, trimmed, 1-255 characters
        description: Optional description, trimmed, up to 1000 characters
        status: Canonical upper-case status
        due_date: When the task is due (naive UTC)
        created_date: Set once when the task is first persisted
        updated_date: Refreshed on every write
    """

    title: str
    case_number: Optional[str] = None
    description: Optional[str] = None
    status: str = TaskStatus.PENDING.value
    due_date: Optional[datetime] = None
    id: Optional[int] = None
    created_date: Optional[datetime] = None
    updated_date: Optional[datetime] = None

    def is_overdue(self, as_of: Optional[datetime] = None) -> bool:
        """Due strictly before ``as_of`` and not completed."""
        if self.due_date is None:
            return False
        return self.due_date < (as_of or utc_now()) and self.status != TaskStatus.COMPLETED.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary representation."""
        return {
            "id": self.id,
            "case_number": self.case_number,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "created_date": self.created_date.isoformat() if self.created_date else None,
            "updated_date": self.updated_date.isoformat() if self.updated_date else None,
        }
