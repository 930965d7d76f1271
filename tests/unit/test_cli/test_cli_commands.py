"""Tests for the casework CLI."""

from datetime import timedelta

import yaml
from typer.testing import CliRunner

from casework_tasks.cli.app import app
from casework_tasks.domain.entities.task import utc_now
from casework_tasks.services import get_service_factory

runner = CliRunner()


def _create(title="Draft letter", *args):
    result = runner.invoke(app, ["create", title, *args])
    assert result.exit_code == 0, result.output
    return result


class TestTaskCommands:
    """Tests for task administration commands."""

    def test_create(self):
        result = _create("Draft letter", "--status", "in_progress")

        assert "Task created:" in result.output
        assert "TASK000001" in result.output

    def test_create_invalid_status(self):
        result = runner.invoke(app, ["create", "Draft", "--status", "DONE"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Invalid status: DONE" in result.output

    def test_create_bad_due_date(self):
        result = runner.invoke(app, ["create", "Draft", "--due", "tomorrow"])

        assert result.exit_code == 1
        assert "Invalid due date" in result.output

    def test_list(self):
        _create("First")
        _create("Second")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "TASK000001" in result.output
        assert "TASK000002" in result.output
        assert "2 tasks" in result.output

    def test_list_empty(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_show_yaml(self):
        _create("Show me", "--description", "details")

        result = runner.invoke(app, ["show", "1", "--yaml"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["case_number"] == "TASK000001"
        assert data["title"] == "Show me"
        assert data["description"] == "details"

    def test_show_flags_overdue(self):
        _create("Chase reply")
        _create("Already done")
        service = get_service_factory().get_task_service()
        past = utc_now() - timedelta(days=2)
        service.update_task(1, due_date=past)
        service.update_task(2, due_date=past, status="COMPLETED")

        late = runner.invoke(app, ["show", "1"])
        done = runner.invoke(app, ["show", "2"])

        assert "(overdue)" in late.output
        assert "(overdue)" not in done.output

    def test_show_by_case_number(self):
        _create("By case")

        result = runner.invoke(app, ["show", "--case", "TASK000001"])

        assert result.exit_code == 0
        assert "By case" in result.output

    def test_show_missing(self):
        result = runner.invoke(app, ["show", "99"])

        assert result.exit_code == 1
        assert "Task with ID 99 not found" in result.output

    def test_show_requires_identifier(self):
        result = runner.invoke(app, ["show"])

        assert result.exit_code == 1

    def test_set_status_and_stats(self):
        _create("Status me")

        result = runner.invoke(app, ["set-status", "1", "completed"])
        assert result.exit_code == 0
        assert "COMPLETED" in result.output

        stats = runner.invoke(app, ["stats", "--yaml"])
        assert yaml.safe_load(stats.output) == {"total": 1, "completed": 1, "overdue": 0}

    def test_delete(self):
        _create("Delete me")

        assert runner.invoke(app, ["delete", "1"]).exit_code == 0
        assert runner.invoke(app, ["delete", "1"]).exit_code == 1

    def test_overdue_empty(self):
        _create("Not late")

        result = runner.invoke(app, ["overdue"])

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_statuses(self):
        result = runner.invoke(app, ["statuses"])

        assert result.output.split() == [
            "PENDING",
            "IN_PROGRESS",
            "COMPLETED",
            "CANCELLED",
            "ON_HOLD",
        ]
