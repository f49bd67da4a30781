"""Show command - Display a single task."""

from __future__ import annotations

import typer

from taskman_cli.services.task_service import get_task_service
from taskman_cli.utils.ui.formatters import format_output, format_task

from .decorators import command_wrapper
from .utils import resolve_output, unwrap

app = typer.Typer()


@app.command("show")
@command_wrapper
async def show(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Show a task by ID."""
    output = resolve_output(output, json_opt)
    task = unwrap(await get_task_service().get_task_by_id(task_id), "get task", task_id)

    if output == "pretty":
        format_task(task)
    else:
        format_output(task.to_json_dict(), output)
