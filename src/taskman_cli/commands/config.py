"""Configuration management commands."""

from __future__ import annotations

import typer
from rich.text import Text

from taskman_cli.services.config_service import get_config_service
from taskman_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskman_cli.utils.logger import log_path
from taskman_cli.utils.typer_helpers import SuggestingGroup
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> str | bool | None:
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null", ""):
        return None
    return value


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    format_output(get_config_service().as_dict(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(str(e.args[0]), exit_code=ERROR_INVALID_ARGS) from e
    console.print(Text("-" if value is None else str(value)))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.tasks_file)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(str(e.args[0]), exit_code=ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    target = f"'{key}'" if key else "all configuration"
    if not yes and not typer.confirm(f"Reset {target} to defaults?"):
        format_info("Cancelled")
        return
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(str(e.args[0]), exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"Reset {target} to defaults")


@app.command("path")
@command_wrapper
def show_paths() -> None:
    """Show the locations of the files taskman reads and writes."""
    config_service = get_config_service()
    console.print(Text(f"Config file: {config_service.config_path}"))
    console.print(Text(f"Tasks file:  {config_service.tasks_file}"))
    console.print(Text(f"Log file:    {log_path()}"))
