"""Status command - Move a task to another status."""

from __future__ import annotations

import typer

from taskman_cli.services.task_service import get_task_service
from taskman_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .utils import parse_status, unwrap

app = typer.Typer()


@app.command("status")
@command_wrapper
async def set_status(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help="New status (todo|in_progress|completed)"),
) -> None:
    """Set the status of a task."""
    new_status = parse_status(status)
    task = unwrap(
        await get_task_service().update_task_status(task_id, new_status),
        "update status",
        task_id,
    )
    format_success(f"'{task.title}' is now {task.status.label.lower()}")
