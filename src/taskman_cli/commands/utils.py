"""Helpers shared by the task commands."""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

import click
import typer

from taskman_cli.models import ErrorCode, Result, TaskStatus
from taskman_cli.services.config_service import get_config_service
from taskman_cli.utils.dates import parse_date
from taskman_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)
from taskman_cli.utils.id_utils import is_valid_task_id
from taskman_cli.utils.ui.formatters import format_error

from .decorators import AppError

T = TypeVar("T")

_EXIT_CODES = {
    ErrorCode.INVALID_TITLE: ERROR_INVALID_ARGS,
    ErrorCode.TASK_NOT_FOUND: ERROR_NOT_FOUND,
}

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

# Typed at an update prompt to clear an optional field
CLEAR_VALUE = "-"


def unwrap(result: Result[T], action: str, task_id: str | None = None) -> T:
    """Return the data of a successful result or raise AppError.

    Args:
        result: Service result
        action: Short verb phrase used in the error, e.g. "create task"
        task_id: ID that was looked up; a not-found error on an ID that
            taskman could never have generated says so
    """
    if result.success:
        return result.data

    exit_code = _EXIT_CODES.get(result.error_code, ERROR_GENERAL)
    message = f"Failed to {action}: {result.message}"
    if result.error and result.error_code is None:
        message += f" ({result.error})"
    elif (
        result.error_code is ErrorCode.TASK_NOT_FOUND
        and task_id is not None
        and not is_valid_task_id(task_id)
    ):
        message += f" ('{task_id}' does not look like a task ID)"
    raise AppError(message, exit_code=exit_code)


def parse_status(value: str) -> TaskStatus:
    """Parse a status name such as ``todo`` or ``in-progress``."""
    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return TaskStatus(normalized)
    except ValueError as e:
        raise AppError(
            f"Invalid status '{value}'. Use one of: {', '.join(TaskStatus.values())}",
            exit_code=ERROR_INVALID_ARGS,
        ) from e


def parse_date_option(value: str | None) -> datetime | None:
    """Parse an optional date option, raising AppError on bad input."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e


def resolve_output(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format from flags, falling back to config."""
    if json_opt:
        return "json"
    if output is None:
        output = get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}'. Use one of: {', '.join(OUTPUT_FORMATS)}",
            exit_code=ERROR_INVALID_ARGS,
        )
    return output


def prompt_until_valid(text: str, **kwargs: Any) -> Any:
    """``typer.prompt`` that asks again after a rejected answer.

    Depending on the click version a rejected value is either re-prompted
    inside click or raised as ``click.BadParameter``; both end up here as a
    new prompt.
    """
    while True:
        try:
            return typer.prompt(text, **kwargs)
        except click.BadParameter as e:
            format_error(e.format_message())
