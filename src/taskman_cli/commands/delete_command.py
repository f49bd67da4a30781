"""Delete command - Delete a task."""

from __future__ import annotations

import typer

from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import format_info, format_success, format_task

from .decorators import command_wrapper
from .utils import unwrap

app = typer.Typer()
console = get_console()


async def delete_task_flow(service: TaskService, task_id: str, yes: bool = False) -> bool:
    """Show the task, confirm unless ``yes``, then delete it.

    Returns:
        True if the task was deleted, False if the user cancelled
    """
    task = unwrap(await service.get_task_by_id(task_id), "delete task", task_id)

    console.print("[yellow]⚠️  This task will be deleted:[/yellow]")
    format_task(task)

    if not yes and not typer.confirm(
        "Are you sure you want to delete this task?", default=False
    ):
        format_info("Cancelled")
        return False

    result = await service.delete_task(task_id)
    unwrap(result, "delete task")
    format_success(result.message)
    return True


@app.command("delete")
@command_wrapper
async def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    await delete_task_flow(get_task_service(), task_id, yes=yes)


app.command("del", hidden=True)(delete)
