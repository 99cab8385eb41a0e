"""
Shared CLI state: Typer apps, console, and the default TUI command.
"""

import os
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console

# Main app
app = typer.Typer(
    name="agentmux",
    help="Dashboard for AI coding agents running in tmux",
    no_args_is_help=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
)

# Config subcommand group
config_app = typer.Typer(
    name="config",
    help="Manage the agentmux config file.",
    no_args_is_help=False,
    invoke_without_command=True,
)
app.add_typer(config_app, name="config")

console = Console()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    debug: Annotated[
        bool, typer.Option("--debug", help="Write debug logs to ~/.agentmux/logs")
    ] = False,
):
    """Launch the dashboard when no command is given."""
    if ctx.invoked_subcommand is not None:
        return

    if not os.environ.get("TMUX"):
        rprint("[red]Error:[/red] agentmux must be run inside a tmux session")
        raise typer.Exit(1)

    from ..logging_config import setup_tui_logging
    from ..tui import run_tui

    logger = setup_tui_logging(debug=debug)
    logger.info("Starting dashboard")
    run_tui()
