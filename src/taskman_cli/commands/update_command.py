"""Update command - Change fields of an existing task."""

from __future__ import annotations

import click
import typer

from taskman_cli.models import Task, TaskStatus, TaskUpdate
from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import format_info, format_output, format_task

from .add_command import prompt_optional_date
from .decorators import command_wrapper
from .utils import (
    CLEAR_VALUE,
    parse_date_option,
    parse_status,
    prompt_until_valid,
    resolve_output,
    unwrap,
)

app = typer.Typer()
console = get_console()


def prompt_task_update(task: Task) -> TaskUpdate:
    """Ask for new values of each field.

    Enter keeps the current value; ``-`` clears the description or due date.
    """
    console.print("[blue]Current task:[/blue]")
    format_task(task)

    title = typer.prompt("New title", default=task.title)
    description = typer.prompt(
        f"New description ('{CLEAR_VALUE}' to clear)",
        default=task.description or "",
        show_default=False,
    )
    if description.strip() == CLEAR_VALUE:
        description = ""
    status = prompt_until_valid(
        "New status",
        type=click.Choice(TaskStatus.values()),
        default=task.status.value,
    )
    current_due = task.due_date.strftime("%Y-%m-%d") if task.due_date else ""
    due = prompt_optional_date(
        f"New due date (YYYY-MM-DD, '{CLEAR_VALUE}' to clear)", default=current_due
    )

    changes: dict = {}
    if title != task.title:
        changes["title"] = title
    if description != (task.description or ""):
        changes["description"] = description
    if status != task.status.value:
        changes["status"] = TaskStatus(status)
    if (due or "") != current_due:
        changes["due_date"] = parse_date_option(due)
    return TaskUpdate(**changes)


async def update_task_flow(
    service: TaskService, task_id: str, updates: TaskUpdate | None = None
) -> Task | None:
    """Apply ``updates`` to a task, prompting for them when not given.

    Returns:
        The updated task, or None when the prompt produced no changes
    """
    if updates is None or updates.is_empty():
        current = unwrap(await service.get_task_by_id(task_id), "update task", task_id)
        updates = prompt_task_update(current)
        if updates.is_empty():
            format_info("No changes made")
            return None
    return unwrap(await service.update_task(task_id, updates), "update task", task_id)


@app.command("update")
@command_wrapper
async def update(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New task description"
    ),
    status: str | None = typer.Option(
        None, "--status", "-s", help="New status (todo|in_progress|completed)"
    ),
    due_date: str | None = typer.Option(
        None, "--due-date", "--due", help="New due date (YYYY-MM-DD)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """
    Update a task.

    With no field options the current values are shown and each field is
    asked for in turn (press Enter to keep).
    """
    output = resolve_output(output, json_opt)

    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if status is not None:
        changes["status"] = parse_status(status)
    if due_date is not None:
        changes["due_date"] = parse_date_option(due_date)

    task = await update_task_flow(get_task_service(), task_id, TaskUpdate(**changes))
    if task is None:
        return

    if output == "pretty":
        console.print("[bold green]✓[/bold green] Task updated successfully!")
        format_task(task)
    else:
        format_output(task.to_json_dict(), output)


app.command("u", hidden=True)(update)
