"""Data management commands - backup, health check and file info."""

from __future__ import annotations

import typer

from taskman_cli.services.task_service import get_task_store
from taskman_cli.utils.exit_codes import ERROR_STORAGE
from taskman_cli.utils.typer_helpers import SuggestingGroup
from taskman_cli.utils.ui.formatters import (
    format_file_info,
    format_output,
    format_success,
    format_warning,
)

from .decorators import AppError, command_wrapper
from .utils import resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Data management (backup, check, info)")


@app.command("backup")
@command_wrapper
async def backup() -> None:
    """Copy the tasks file to a timestamped backup next to it."""
    store = get_task_store()
    if not store.path.exists():
        format_warning(f"No tasks file at {store.path}, nothing to back up")
        return
    if not await store.backup():
        raise AppError("Backup failed, see the log for details", exit_code=ERROR_STORAGE)
    format_success(f"Tasks backed up in {store.path.parent}")


@app.command("check")
@command_wrapper
async def check() -> None:
    """Check that the tasks file is readable, writable and valid JSON."""
    store = get_task_store()
    if not await store.check_health():
        raise AppError(
            f"Tasks file {store.path} is not healthy, see the log for details",
            exit_code=ERROR_STORAGE,
        )
    format_success(f"Tasks file {store.path} is healthy")


@app.command("info")
@command_wrapper
async def info(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Show size, modification time and task count of the tasks file."""
    output = resolve_output(output, json_opt)
    file_info = await get_task_store().get_file_info()
    if file_info is None:
        raise AppError("Could not read the tasks file", exit_code=ERROR_STORAGE)

    if output == "pretty":
        format_file_info(file_info)
    else:
        format_output(file_info.model_dump(mode="json"), output)
