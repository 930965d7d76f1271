"""Pydantic request/response models for the REST API.

JSON payloads use camelCase keys (``caseNumber``, ``dueDate``); Python code
uses snake_case attribute names.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from casework_tasks.domain.entities.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskDTO,
)

# Messages for request fields that are absent or null.
REQUIRED_FIELD_MESSAGES: Dict[str, str] = {
    "title": "Title is required",
    "dueDate": "Due date is required",
    "status": "Status is required",
}


def _check_title_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must not exceed {TITLE_MAX_LENGTH} characters")
    return value


def _check_description_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters")
    return value


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CreateTaskRequest(CamelModel):
    """Body of POST /api/v1/tasks."""

    title: Optional[str]
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime]

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            raise ValueError(REQUIRED_FIELD_MESSAGES["title"])
        return _check_title_length(value)

    @field_validator("description")
    @classmethod
    def description_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_description_length(value)

    @field_validator("due_date")
    @classmethod
    def due_date_present(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            raise ValueError(REQUIRED_FIELD_MESSAGES["dueDate"])
        return value


class UpdateStatusRequest(CamelModel):
    """Body of PUT /api/v1/tasks/{id}/status."""

    status: Optional[str]

    @field_validator("status")
    @classmethod
    def status_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            raise ValueError(REQUIRED_FIELD_MESSAGES["status"])
        return value


class UpdateTaskRequest(CamelModel):
    """Body of PUT /api/v1/tasks/{id}; every field is optional."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_title_length(value)

    @field_validator("description")
    @classmethod
    def description_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_description_length(value)


class TaskResponse(CamelModel):
    """A task as returned by the API."""

    id: int
    case_number: str
    title: str
    description: Optional[str] = None
    status: str
    due_date: datetime
    created_date: datetime
    updated_date: datetime

    @classmethod
    def from_dto(cls, task: TaskDTO) -> "TaskResponse":
        return cls(
            id=task.id,
            case_number=task.case_number,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
            created_date=task.created_date,
            updated_date=task.updated_date,
        )


class TaskPageResponse(CamelModel):
    """Paginated result of GET /api/v1/tasks."""

    tasks: List[TaskResponse]
    total_tasks: int
    total_pages: int
    current_page: int
    page_size: int


class ErrorResponse(BaseModel):
    """Standard error body."""

    status: int
    error: str
    message: str
    timestamp: str
    validation_errors: Optional[Dict[str, str]] = None

    def to_content(self) -> Dict[str, Any]:
        content = self.model_dump(exclude={"validation_errors"})
        if self.validation_errors is not None:
            content["validationErrors"] = self.validation_errors
        return content


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    status: str
    version: str
    database: Dict[str, Any]
