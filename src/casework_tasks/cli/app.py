"""CLI application using Typer."""

import math
from datetime import datetime
from typing import Any, List, NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from casework_tasks.config import Settings
from casework_tasks.domain.entities.result_types import DomainResult
from casework_tasks.domain.entities.task import TaskDTO
from casework_tasks.services import get_service_factory
from casework_tasks.services.task_service import TaskService

console = Console()
app = typer.Typer(
    name="casework",
    help="Casework Tasks - task tracking for caseworkers",
    no_args_is_help=True,
)


def _service() -> TaskService:
    return get_service_factory().get_task_service()


def _fail(message: Optional[str]) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _unwrap(result: DomainResult[Any]) -> Any:
    if result.is_failure:
        _fail(result.error_message)
    return result.data


def _dump_yaml(data: Any) -> None:
    typer.echo(yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False))


def _parse_due(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        _fail(f"Invalid due date '{value}', expected ISO-8601 such as 2030-01-31T17:00:00")


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def _format_due(task: TaskDTO) -> str:
    due = _format_date(task.due_date)
    return f"[red]{due} (overdue)[/red]" if task.is_overdue() else due


def _print_tasks(tasks: List[TaskDTO], title: str) -> None:
    if not tasks:
        console.print("No tasks found.")
        return

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Case", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Status")
    table.add_column("Due")

    for task in tasks:
        table.add_row(
            str(task.id),
            task.case_number or "",
            task.title,
            task.status,
            _format_due(task),
        )

    console.print(table)


def _print_task(task: TaskDTO) -> None:
    console.print(f"\n[bold]{task.title}[/bold]")
    console.print(f"ID: {task.id}")
    console.print(f"Case number: {task.case_number}")
    console.print(f"Status: {task.status}")
    console.print(f"Due: {_format_due(task)}")
    if task.description:
        console.print(f"Description: {task.description}")
    console.print(f"Created: {_format_date(task.created_date)}")
    console.print(f"Updated: {_format_date(task.updated_date)}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind host (default CASEWORK_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default CASEWORK_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the REST API under uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(
        "casework_tasks.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("create")
def task_create(
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Initial status"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (ISO-8601)"),
) -> None:
    """Create a new task."""
    task = _unwrap(
        _service().create_task(
            title=title, description=description, status=status, due_date=_parse_due(due)
        )
    )
    console.print(f"[green]Task created:[/green] {task.case_number} (id {task.id})")
    console.print(f"Title: {task.title}")


@app.command("list")
def task_list(
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search text"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)"),
    page_size: int = typer.Option(10, "--page-size", min=1, max=100, help="Tasks per page"),
) -> None:
    """List tasks."""
    service = _service()
    tasks = _unwrap(service.search_tasks(search, status, (page - 1) * page_size, page_size))
    total = _unwrap(service.count_filtered_tasks(search, status))

    _print_tasks(tasks, title="Tasks")
    console.print(f"Page {page} of {math.ceil(total / page_size)} ({total} tasks)")


@app.command("show")
def task_show(
    task_id: Optional[int] = typer.Argument(None, help="Task ID"),
    case_number: Optional[str] = typer.Option(None, "--case", "-c", help="Look up by case number"),
    as_yaml: bool = typer.Option(False, "--yaml", help="Print as YAML"),
) -> None:
    """Show task details."""
    service = _service()
    if case_number is not None:
        task = _unwrap(service.get_task_by_case_number(case_number))
    elif task_id is not None:
        task = _unwrap(service.get_task_by_id(task_id))
    else:
        _fail("Provide a task ID or --case")

    if as_yaml:
        _dump_yaml(task.to_dict())
    else:
        _print_task(task)


@app.command("set-status")
def task_set_status(
    task_id: int = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help="New status"),
) -> None:
    """Change a task's status."""
    task = _unwrap(_service().update_task_status(task_id, status))
    console.print(f"[green]Task {task.case_number} status:[/green] {task.status}")


@app.command("delete")
def task_delete(task_id: int = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""
    data = _unwrap(_service().delete_task(task_id))
    console.print(f"[green]Deleted:[/green] {data['case_number']}")


@app.command("overdue")
def task_overdue() -> None:
    """List overdue tasks."""
    _print_tasks(_unwrap(_service().get_overdue_tasks()), title="Overdue tasks")


@app.command("stats")
def task_stats(as_yaml: bool = typer.Option(False, "--yaml", help="Print as YAML")) -> None:
    """Show task counts."""
    stats = _unwrap(_service().get_task_statistics())
    if as_yaml:
        _dump_yaml(stats)
        return

    table = Table(title="Task statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    for key, value in stats.items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("statuses")
def task_statuses() -> None:
    """List valid statuses."""
    for status in _unwrap(_service().get_valid_statuses()):
        typer.echo(status)


def create_app() -> typer.Typer:
    """Create and return the Typer app."""
    return app
