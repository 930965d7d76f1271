"""
Domain Result Types - Pure Business Logic Results.

These types represent the outcome of domain operations without any
infrastructure or presentation concerns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar


class DomainErrorType(Enum):
    """Types of domain errors."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    OPERATION_FAILED = "operation_failed"


class TaskServiceError(Exception):
    """Base exception for failed task operations."""

    error_type: DomainErrorType = DomainErrorType.OPERATION_FAILED

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TaskNotFoundError(TaskServiceError):
    """Raised when a task looked up by ID or case number does not exist."""

    error_type = DomainErrorType.NOT_FOUND


class InvalidTaskArgumentError(TaskServiceError):
    """Raised when task input fails validation (title, status, due date)."""

    error_type = DomainErrorType.VALIDATION_ERROR


class DuplicateCaseNumberError(TaskServiceError):
    """Raised when a case number conflicts with an existing task."""

    error_type = DomainErrorType.ALREADY_EXISTS


class TaskOperationError(TaskServiceError):
    """Raised when the storage layer fails to complete an operation."""

    error_type = DomainErrorType.OPERATION_FAILED


ERROR_EXCEPTIONS: Dict[DomainErrorType, Type[TaskServiceError]] = {
    DomainErrorType.VALIDATION_ERROR: InvalidTaskArgumentError,
    DomainErrorType.NOT_FOUND: TaskNotFoundError,
    DomainErrorType.ALREADY_EXISTS: DuplicateCaseNumberError,
    DomainErrorType.OPERATION_FAILED: TaskOperationError,
}


T = TypeVar("T")


@dataclass
class DomainResult(Generic[T]):
    """
    Base result type for domain operations.

    Represents either success with data or failure with error information.
    This is a pure domain type with no infrastructure dependencies.
    """

    success: bool
    data: Optional[T] = None
    error_type: Optional[DomainErrorType] = None
    error_message: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)
    suggestions: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    @property
    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success

    def to_exception(self) -> TaskServiceError:
        """Build the typed exception matching this failure's error type."""
        exc_class = ERROR_EXCEPTIONS.get(
            self.error_type or DomainErrorType.OPERATION_FAILED, TaskOperationError
        )
        return exc_class(self.error_message or "Operation failed", self.error_details)

    def get_data_or_raise(self) -> T:
        """Get data or raise the typed exception if failed."""
        if self.is_failure:
            raise self.to_exception()
        return self.data  # type: ignore

    def get_data_or_default(self, default: T) -> T:
        """Get data or return default if failed."""
        return self.data if self.is_success and self.data is not None else default


@dataclass
class DomainSuccess(Generic[T]):
    """
    Factory for creating successful domain results.

    Usage:
        result = DomainSuccess.create(data=task)
    """

    @staticmethod
    def create(
        data: Optional[T] = None, suggestions: Optional[List[str]] = None
    ) -> DomainResult[T]:
        """Create a successful domain result."""
        return DomainResult(success=True, data=data, suggestions=suggestions or [])


@dataclass
class DomainError:
    """
    Factory for creating failed domain results.

    Usage:
        result = DomainError.validation_error("Title is required", details={"field": "title"})
    """

    @staticmethod
    def create(
        error_type: DomainErrorType,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a failed domain result."""
        return DomainResult(
            success=False,
            error_type=error_type,
            error_message=message,
            error_details=details or {},
            suggestions=suggestions or [],
        )

    @staticmethod
    def validation_error(
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a validation error result."""
        return DomainError.create(
            DomainErrorType.VALIDATION_ERROR,
            message,
            details,
            suggestions or ["Check input format and try again"],
        )

    @staticmethod
    def not_found(
        resource: str,
        identifier: Any,
        field_label: str = "ID",
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a not found error result.

        The message reads "<resource> with <field_label> <identifier> not found".
        """
        return DomainError.create(
            DomainErrorType.NOT_FOUND,
            f"{resource} with {field_label} {identifier} not found",
            {"resource": resource, field_label.lower().replace(" ", "_"): identifier},
            suggestions or [f"Verify the {resource.lower()} {field_label} and try again"],
        )

    @staticmethod
    def already_exists(
        resource: str, identifier: str, suggestions: Optional[List[str]] = None
    ) -> DomainResult[Any]:
        """Create an already exists error result."""
        return DomainError.create(
            DomainErrorType.ALREADY_EXISTS,
            f"{resource} '{identifier}' already exists",
            {"resource": resource, "identifier": identifier},
            suggestions or [f"Use a different {resource.lower()}"],
        )

    @staticmethod
    def operation_failed(
        operation: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create an operation failed error result."""
        return DomainError.create(
            DomainErrorType.OPERATION_FAILED,
            f"Operation '{operation}' failed: {reason}",
            {**(details or {}), "operation": operation},
            suggestions,
        )
