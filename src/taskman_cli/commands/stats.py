"""Stats command - Task counts and completion rate."""

from __future__ import annotations

import typer

from taskman_cli.models import TaskStats
from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.ui.formatters import format_output, format_stats

from .decorators import command_wrapper
from .utils import resolve_output, unwrap

app = typer.Typer()


async def stats_flow(service: TaskService) -> TaskStats:
    return unwrap(await service.get_task_stats(), "get stats")


@app.command("stats")
@command_wrapper
async def stats(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Show task statistics."""
    output = resolve_output(output, json_opt)
    task_stats = await stats_flow(get_task_service())

    if output == "pretty":
        format_stats(task_stats)
    else:
        format_output(task_stats.model_dump(), output)
