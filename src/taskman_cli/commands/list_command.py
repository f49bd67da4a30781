"""List command - List tasks with optional filters."""

from __future__ import annotations

import typer

from taskman_cli.models import Task, TaskFilters
from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import format_output, format_tasks_pretty

from .decorators import command_wrapper
from .utils import parse_date_option, parse_status, resolve_output, unwrap

app = typer.Typer()
console = get_console()


async def list_tasks_flow(
    service: TaskService, filters: TaskFilters | None = None
) -> list[Task]:
    """Return tasks newest first, raising AppError on failure."""
    return unwrap(await service.get_all_tasks(filters), "list tasks")


def show_tasks(tasks: list[Task], output: str) -> None:
    if output == "pretty":
        format_tasks_pretty(tasks)
    else:
        format_output({"tasks": [t.to_json_dict() for t in tasks]}, output)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str | None = typer.Option(
        None, "--status", "-s", help="Filter by status (todo|in_progress|completed)"
    ),
    overdue: bool = typer.Option(False, "--overdue", help="Show overdue tasks only"),
    has_description: bool | None = typer.Option(
        None,
        "--has-description/--no-description",
        help="Only tasks with (or without) a description",
    ),
    due_before: str | None = typer.Option(
        None, "--due-before", help="Exclude tasks due after this date"
    ),
    due_after: str | None = typer.Option(
        None, "--due-after", help="Exclude tasks due before this date"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """List tasks, newest first."""
    output = resolve_output(output, json_opt)

    filters = TaskFilters(
        status=parse_status(status) if status else None,
        has_description=has_description,
        due_before=parse_date_option(due_before),
        due_after=parse_date_option(due_after),
        overdue=overdue,
    )

    tasks = await list_tasks_flow(get_task_service(), filters)
    show_tasks(tasks, output)


app.command("ls", hidden=True)(list_tasks)
