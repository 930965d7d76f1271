"""
Task SQLAlchemy Model.

Represents a caseworker task row in the ``tasks`` table.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String

from casework_tasks.database.models.base import (
    TASK_STATUS_CONSTRAINT,
    Base,
    get_current_timestamp,
)
from casework_tasks.domain.entities.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class Task(Base):
    """
    Task model.

    ``case_number`` carries a unique constraint; it is the authoritative guard
    against two concurrent creates claiming the same generated number.
    """

    __tablename__ = "tasks"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    case_number: str = Column(String(20), nullable=False, unique=True, index=True)
    title: str = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Optional[str] = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    status: str = Column(String(20), nullable=False, index=True)
    due_date: datetime = Column(DateTime, nullable=False, index=True)
    created_date: datetime = Column(DateTime, nullable=False, default=get_current_timestamp)
    updated_date: datetime = Column(
        DateTime, nullable=False, default=get_current_timestamp, onupdate=get_current_timestamp
    )

    # Table-level constraints
    __table_args__ = (TASK_STATUS_CONSTRAINT,)

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id!r}, case_number={self.case_number!r}, "
            f"status={self.status!r})>"
        )
