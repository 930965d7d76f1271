"""Tests for the task DTO and status enumeration."""

from datetime import datetime, timedelta, timezone

from casework_tasks.domain.entities.task import (
    DEFAULT_DUE_DAYS,
    TaskDTO,
    TaskStatus,
    default_due_date,
    to_storage_datetime,
)


class TestTaskStatus:
    """Tests for TaskStatus."""

    def test_valid_statuses_in_order(self):
        assert TaskStatus.valid_statuses() == [
            "PENDING",
            "IN_PROGRESS",
            "COMPLETED",
            "CANCELLED",
            "ON_HOLD",
        ]

    def test_is_valid_is_case_insensitive(self):
        assert TaskStatus.is_valid("pending")
        assert TaskStatus.is_valid("In_Progress")
        assert TaskStatus.is_valid("ON_HOLD")

    def test_is_valid_rejects_unknown_and_none(self):
        assert not TaskStatus.is_valid("DONE")
        assert not TaskStatus.is_valid("")
        assert not TaskStatus.is_valid(None)


class TestTimestamps:
    """Tests for timestamp normalization helpers."""

    def test_aware_datetime_converted_to_naive_utc(self):
        aware = datetime(2030, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

        assert to_storage_datetime(aware) == datetime(2030, 1, 1, 10, 0)

    def test_naive_datetime_kept(self):
        naive = datetime(2030, 1, 1, 12, 0)

        assert to_storage_datetime(naive) is naive

    def test_default_due_date(self):
        now = datetime(2030, 1, 1)

        assert default_due_date(now) == now + timedelta(days=DEFAULT_DUE_DAYS)


class TestTaskDTO:
    """Tests for TaskDTO."""

    def test_defaults(self):
        task = TaskDTO(title="Review bundle")

        assert task.status == "PENDING"
        assert task.id is None
        assert task.case_number is None

    def test_is_overdue(self):
        now = datetime(2030, 1, 10)
        past = datetime(2030, 1, 1)

        assert TaskDTO(title="a", due_date=past).is_overdue(now)
        assert not TaskDTO(title="b", due_date=past, status="COMPLETED").is_overdue(now)
        assert not TaskDTO(title="c", due_date=now + timedelta(days=1)).is_overdue(now)
        assert not TaskDTO(title="d").is_overdue(now)

    def test_to_dict(self):
        task = TaskDTO(
            id=3,
            case_number="TASK000003",
            title="File papers",
            status="IN_PROGRESS",
            due_date=datetime(2030, 2, 1, 9, 30),
        )

        data = task.to_dict()

        assert data["due_date"] == "2030-02-01T09:30:00"
        assert data["case_number"] == "TASK000003"
        assert data["description"] is None
        assert data["created_date"] is None
