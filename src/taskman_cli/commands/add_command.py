"""Command 'add' of taskman-cli"""

from __future__ import annotations

import typer

from taskman_cli.models import Task, TaskCreate
from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.dates import parse_date
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import format_error, format_output, format_task

from .decorators import command_wrapper
from .utils import CLEAR_VALUE, parse_date_option, resolve_output, unwrap

app = typer.Typer()
console = get_console()


def prompt_optional_date(label: str, default: str = "") -> str | None:
    """Prompt until the user enters a valid date, nothing, or the clear marker."""
    while True:
        value = typer.prompt(label, default=default, show_default=bool(default)).strip()
        if not value or value == CLEAR_VALUE:
            return None
        try:
            parse_date(value)
            return value
        except ValueError as e:
            format_error(str(e))


def prompt_task_create() -> TaskCreate:
    """Ask for the fields of a new task."""
    while True:
        title = typer.prompt("Task title").strip()
        if title:
            break
        console.print("[red]Title cannot be empty[/red]")
    description = typer.prompt(
        "Task description (optional)", default="", show_default=False
    )
    due = prompt_optional_date("Due date (YYYY-MM-DD, optional)")
    return TaskCreate(
        title=title,
        description=description or None,
        due_date=parse_date_option(due),
    )


async def create_task_flow(service: TaskService, task_data: TaskCreate) -> Task:
    """Create a task and return it, raising AppError on failure."""
    return unwrap(await service.create_task(task_data), "create task")


@app.command("add")
@command_wrapper
async def add(
    title: str | None = typer.Option(None, "--title", "-t", help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Task description"
    ),
    due_date: str | None = typer.Option(
        None, "--due-date", "--due", help="Due date (YYYY-MM-DD)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """
    Create a task.

    Without --title the fields are asked for interactively.

    Examples:
      taskman add -t "Write report" -d "Q3 numbers" --due-date 2024-07-01
      taskman add
    """
    output = resolve_output(output, json_opt)

    if title is None:
        task_data = prompt_task_create()
    else:
        task_data = TaskCreate(
            title=title,
            description=description,
            due_date=parse_date_option(due_date),
        )

    task = await create_task_flow(get_task_service(), task_data)

    if output == "pretty":
        console.print("[bold green]✓[/bold green] Task created successfully!")
        format_task(task)
    else:
        format_output(task.to_json_dict(), output)


app.command("a", hidden=True)(add)
