"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from taskman_cli.models import FileInfo, Task, TaskStats, TaskStatus
from taskman_cli.utils.dates import format_timestamp, utc_now

from .console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display JSON-compatible data based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(Text(str(item)))
    elif isinstance(data, dict):
        if "tasks" in data:
            format_dict_table(data["tasks"])
        else:
            format_single_item(data)
    else:
        console.print(Text(str(data)))


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    # Union of keys so optional fields (description, dueDate) get a column
    columns: list[str] = []
    for item in items:
        for key in item:
            if key not in columns:
                columns.append(key)

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(_humanize_key(col))

    for item in items:
        table.add_row(*[Text(_format_cell(item.get(col))) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(_humanize_key(key), Text(_format_cell(value)))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Generic pretty output for data that has no dedicated renderer."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return
    if isinstance(data, dict):
        for key, value in data.items():
            console.print(
                Text.assemble((f"{_humanize_key(key)}:", "cyan"), " ", _format_cell(value))
            )
    elif isinstance(data, list):
        for item in data:
            console.print(Text(str(item)))
    else:
        console.print(Text(str(data)))


def _format_message(label: str, style: str, message: str) -> None:
    # Messages carry user data (titles, paths); never parse them as markup
    console.print(Text.assemble((label, style), " ", message))


def format_error(message: str) -> None:
    """Format and display an error message."""
    _format_message("Error:", "bold red", message)


def format_success(message: str) -> None:
    """Format and display a success message."""
    _format_message("Success:", "bold green", message)


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    _format_message("Warning:", "bold yellow", message)


def format_info(message: str) -> None:
    """Format and display an info message."""
    _format_message("Info:", "bold blue", message)


# ============================================================================
# Task rendering
# ============================================================================

STATUS_ICONS = {
    TaskStatus.TODO: "⏳",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.COMPLETED: "✅",
}

STATUS_COLORS = {
    TaskStatus.TODO: "grey62",
    TaskStatus.IN_PROGRESS: "blue",
    TaskStatus.COMPLETED: "green",
}

METADATA_ICONS = {
    "id": "📋",
    "status": "🏷️",
    "description": "📝",
    "created": "📅",
    "updated": "🔄",
    "due": "⏰",
    "overdue": "⚠️",
}


def task_choice_label(task: Task) -> str:
    """One-line label used when picking a task from a list."""
    return f"{STATUS_ICONS[task.status]} {task.title}"


def format_task(task: Task, now: datetime | None = None) -> None:
    """Render a single task as a block of labelled lines."""
    now = now or utc_now()
    color = STATUS_COLORS[task.status]

    console.print("-" * 50, style="dim")
    title = Text(f"{STATUS_ICONS[task.status]} ")
    title.append(task.title, style="dim" if task.status == TaskStatus.COMPLETED else "bold")
    console.print(title)
    console.print(Text.assemble(f"{METADATA_ICONS['id']} ID: ", (task.id, "dim")))
    console.print(
        f"{METADATA_ICONS['status']}  Status: [{color}]{task.status.label}[/{color}]"
    )

    if task.description:
        console.print(
            Text(f"{METADATA_ICONS['description']} Description: {task.description}")
        )

    console.print(f"{METADATA_ICONS['created']} Created: {format_timestamp(task.created_at)}")
    if task.updated_at != task.created_at:
        console.print(
            f"{METADATA_ICONS['updated']} Updated: {format_timestamp(task.updated_at)}"
        )

    if task.due_date:
        overdue = task.is_overdue(now)
        due_style = "bold red" if overdue else "yellow"
        console.print(
            f"{METADATA_ICONS['due']} Due: [{due_style}]{format_timestamp(task.due_date)}[/{due_style}]"
        )
        if overdue:
            console.print(f"[red]{METADATA_ICONS['overdue']} Task is overdue![/red]")


def format_tasks_pretty(tasks: list[Task]) -> None:
    """Render a list of tasks with a header line."""
    if not tasks:
        console.print("[yellow]📝 No tasks found[/yellow]")
        return

    now = utc_now()
    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(tasks)})", style="dim")
    console.print(header)
    console.print()
    for task in tasks:
        format_task(task, now=now)


def format_stats(stats: TaskStats) -> None:
    """Render task statistics."""
    console.print("\n[bold blue]📊 Task Stats[/bold blue]")
    console.print("-" * 30, style="dim")
    console.print(f"📝 Total tasks: [yellow]{stats.total}[/yellow]")
    console.print(f"⏳ Todo: [grey62]{stats.todo}[/grey62]")
    console.print(f"🔄 In progress: [blue]{stats.in_progress}[/blue]")
    console.print(f"✅ Completed: [green]{stats.completed}[/green]")
    console.print(f"⚠️  Overdue: [red]{stats.overdue}[/red]")

    if stats.total > 0:
        rate = stats.completion_rate
        color = get_completion_color(rate)
        console.print(
            f"🎯 Completion rate: [{color}]{get_progress_bar(rate)} {rate}%[/{color}]"
        )


def format_file_info(info: FileInfo) -> None:
    """Render data file metadata."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Path", Text(info.path))
    table.add_row("Exists", "✓" if info.exists else "✗")
    table.add_row("Size", f"{info.size} bytes")
    table.add_row("Last modified", format_timestamp(info.last_modified))
    table.add_row("Tasks", str(info.task_count))
    console.print(table)


# ============================================================================
# Helper Functions
# ============================================================================


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def _humanize_key(key: str) -> str:
    # camelCase and snake_case keys both become "Title Case"
    spaced = "".join(f" {c}" if c.isupper() else c for c in key)
    return spaced.replace("_", " ").strip().title()


def _format_cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)
