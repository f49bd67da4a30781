"""Version command."""

import typer

from taskman_cli import __version__
from taskman_cli.utils.ui.console import get_console

app = typer.Typer()
console = get_console()


@app.command("version")
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskman[/bold] version [cyan]{__version__}[/cyan]")
