"""
Database Models Base Classes and Utilities.

Shared base classes, utilities, and common functionality for all database models.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import DeclarativeBase

from casework_tasks.domain.entities.task import TaskStatus, utc_now


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""

    # Models annotate Column attributes with plain types rather than Mapped[]
    __allow_unmapped__ = True


def get_current_timestamp() -> datetime:
    """Get current timestamp in UTC.

    Returns:
        datetime: Naive UTC timestamp for record creation/updates.
    """
    return utc_now()


# Common check constraints
TASK_STATUS_CONSTRAINT = CheckConstraint(
    "status IN ({})".format(", ".join(f"'{s}'" for s in TaskStatus.valid_statuses())),
    name="check_task_status",
)
