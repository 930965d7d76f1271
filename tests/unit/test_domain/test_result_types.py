"""Tests for domain result types."""

import pytest

from casework_tasks.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainSuccess,
    DuplicateCaseNumberError,
    InvalidTaskArgumentError,
    TaskNotFoundError,
    TaskOperationError,
    TaskServiceError,
)


class TestDomainResult:
    """Tests for DomainResult."""

    def test_success_result(self):
        """Test creating a success result."""
        result = DomainSuccess.create(data={"id": 123})

        assert result.success is True
        assert result.is_success is True
        assert result.is_failure is False
        assert result.data == {"id": 123}
        assert result.error_message is None

    def test_error_result(self):
        """Test creating an error result."""
        result = DomainError.validation_error("Title is required")

        assert result.success is False
        assert result.is_failure is True
        assert result.error_message == "Title is required"
        assert result.error_type == DomainErrorType.VALIDATION_ERROR

    def test_not_found_message(self):
        result = DomainError.not_found("Task", 42)

        assert result.error_type == DomainErrorType.NOT_FOUND
        assert result.error_message == "Task with ID 42 not found"
        assert result.error_details["id"] == 42

    def test_not_found_with_field_label(self):
        result = DomainError.not_found("Task", "TASK000009", field_label="case number")

        assert result.error_message == "Task with case number TASK000009 not found"
        assert result.error_details["case_number"] == "TASK000009"

    def test_already_exists_error(self):
        """Test creating an already exists error."""
        result = DomainError.already_exists("Case number", "TASK000001")

        assert result.error_type == DomainErrorType.ALREADY_EXISTS
        assert result.error_message == "Case number 'TASK000001' already exists"

    def test_operation_failed_records_operation(self):
        result = DomainError.operation_failed("save_task", "disk full")

        assert result.error_type == DomainErrorType.OPERATION_FAILED
        assert "save_task" in result.error_message
        assert result.error_details["operation"] == "save_task"

    def test_get_data_or_raise_success(self):
        """Test get_data_or_raise with success."""
        result = DomainSuccess.create(data={"value": 42})
        assert result.get_data_or_raise() == {"value": 42}

    def test_get_data_or_raise_returns_none_data(self):
        assert DomainSuccess.create(data=None).get_data_or_raise() is None

    @pytest.mark.parametrize(
        "result,exc_class",
        [
            (DomainError.not_found("Task", 1), TaskNotFoundError),
            (DomainError.validation_error("bad"), InvalidTaskArgumentError),
            (DomainError.already_exists("Case number", "TASK000001"), DuplicateCaseNumberError),
            (DomainError.operation_failed("count", "boom"), TaskOperationError),
        ],
    )
    def test_get_data_or_raise_raises_typed_exception(self, result, exc_class):
        with pytest.raises(exc_class) as exc_info:
            result.get_data_or_raise()

        assert isinstance(exc_info.value, TaskServiceError)
        assert exc_info.value.message == result.error_message
        assert exc_info.value.error_type == result.error_type

    def test_get_data_or_default(self):
        """Test get_data_or_default."""
        assert DomainError.validation_error("Error").get_data_or_default("fallback") == "fallback"
        assert DomainSuccess.create(data=None).get_data_or_default(7) == 7
        assert DomainSuccess.create(data=3).get_data_or_default(7) == 3
