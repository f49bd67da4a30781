"""Interactive command - Menu-driven task management session."""

from __future__ import annotations

import click
import typer
from rich.text import Text

from taskman_cli.services.task_service import TaskService, get_task_service
from taskman_cli.utils.ui.console import get_console
from taskman_cli.utils.ui.formatters import (
    format_error,
    format_stats,
    format_task,
    task_choice_label,
)

from .add_command import create_task_flow, prompt_task_create
from .decorators import AppError, command_wrapper
from .delete_command import delete_task_flow
from .list_command import list_tasks_flow, show_tasks
from .stats import stats_flow
from .update_command import update_task_flow
from .utils import prompt_until_valid

app = typer.Typer()
console = get_console()

ACTIONS = [
    ("add", "📝 Add task"),
    ("list", "📋 List tasks"),
    ("update", "✏️  Update task"),
    ("delete", "🗑️  Delete task"),
    ("stats", "📊 Task stats"),
    ("exit", "🚪 Exit"),
]


def choose_action() -> str:
    """Print the menu and return the chosen action key."""
    console.print("[bold]Please choose an action:[/bold]")
    for number, (_, label) in enumerate(ACTIONS, 1):
        console.print(f"  {number}. {label}")
    choice = prompt_until_valid("Action", type=click.IntRange(1, len(ACTIONS)))
    return ACTIONS[choice - 1][0]


async def pick_task(service: TaskService, verb: str) -> str | None:
    """Let the user pick a task from a numbered list.

    Returns:
        The chosen task ID, or None when there are no tasks
    """
    tasks = await list_tasks_flow(service)
    if not tasks:
        console.print(f"[yellow]📝 No task can be {verb}[/yellow]")
        return None

    for number, task in enumerate(tasks, 1):
        console.print(Text(f"  {number}. {task_choice_label(task)}"))
    choice = prompt_until_valid(
        f"Choose the task to be {verb}", type=click.IntRange(1, len(tasks))
    )
    return tasks[choice - 1].id


async def run_action(service: TaskService, action: str) -> None:
    if action == "add":
        task = await create_task_flow(service, prompt_task_create())
        console.print("[bold green]✓[/bold green] Task created successfully!")
        format_task(task)
    elif action == "list":
        show_tasks(await list_tasks_flow(service), "pretty")
    elif action == "update":
        task_id = await pick_task(service, "updated")
        if task_id:
            task = await update_task_flow(service, task_id)
            if task is not None:
                console.print("[bold green]✓[/bold green] Task updated successfully!")
                format_task(task)
    elif action == "delete":
        task_id = await pick_task(service, "deleted")
        if task_id:
            await delete_task_flow(service, task_id)
    elif action == "stats":
        format_stats(await stats_flow(service))


async def run_interactive(service: TaskService) -> None:
    """Loop over the menu until the user exits.

    A failed action is reported and the loop continues.
    """
    console.print("[bold blue]🚀 Welcome to interactive mode![/bold blue]")
    while True:
        action = choose_action()
        if action == "exit":
            console.print("[blue]👋 Goodbye![/blue]")
            break
        try:
            await run_action(service, action)
        except (AppError, click.UsageError) as e:
            format_error(str(e))
        console.print()


@app.command("interactive")
@command_wrapper
async def interactive() -> None:
    """Enter the interactive mode."""
    await run_interactive(get_task_service())


app.command("i", hidden=True)(interactive)
