"""Main entry point for taskman-cli."""

import typer

from taskman_cli.commands import (
    add_command,
    config,
    data_command,
    delete_command,
    interactive_command,
    list_command,
    show_command,
    stats,
    status_command,
    update_command,
    version_command,
)
from taskman_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="taskman",
    cls=SuggestingGroup,
    help="A local command-line task tracker",
    no_args_is_help=True,
)

# Top-level task commands
app.add_typer(add_command.app)
app.add_typer(list_command.app)
app.add_typer(show_command.app)
app.add_typer(update_command.app)
app.add_typer(status_command.app)
app.add_typer(delete_command.app)
app.add_typer(stats.app)
app.add_typer(interactive_command.app)
app.add_typer(version_command.app)

# Subcommand groups
app.add_typer(data_command.app, name="data", help="Data management (backup, check, info)")
app.add_typer(config.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
