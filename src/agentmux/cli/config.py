"""
Config commands: init, show, path.
"""

from typing import Annotated

import typer
from rich import print as rprint
from rich.markup import escape

from ._shared import config_app


CONFIG_TEMPLATE = """\
# agentmux configuration
# Location: ~/.agentmux/config.yaml

# Seconds between full status refreshes
# poll_interval: 2.0

# Seconds between preview refreshes of the selected pane
# preview_interval: 0.2

# Trailing pane lines inspected when detecting status
# capture_lines: 10

# Scroll-back lines shown in the preview
# preview_lines: 50

# Agent activity log used for "last active" times
# history_path: ~/.claude/history.jsonl

# Extra substrings that mark a pane as needing attention
# attention_patterns:
#   - "Press enter to continue"
"""


@config_app.callback(invoke_without_command=True)
def config_default(ctx: typer.Context):
    """Show current configuration (default when no subcommand given)."""
    if ctx.invoked_subcommand is None:
        _config_show()


@config_app.command("init")
def config_init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config file")
    ] = False,
):
    """Create a config file with documented defaults.

    Creates ~/.agentmux/config.yaml with all options commented out.
    Use --force to overwrite an existing config file.
    """
    from ..config import CONFIG_PATH

    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)

    if CONFIG_PATH.exists() and not force:
        rprint(f"[yellow]Config file already exists:[/yellow] {CONFIG_PATH}")
        rprint("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(1)

    CONFIG_PATH.write_text(CONFIG_TEMPLATE)
    rprint(f"[green]✓[/green] Created config file: [bold]{CONFIG_PATH}[/bold]")


@config_app.command("show")
def config_show():
    """Show current configuration."""
    _config_show()


def _config_show():
    """Print the effective settings, marking the ones left at default."""
    from ..config import (
        CONFIG_PATH,
        get_attention_patterns,
        get_capture_lines,
        get_history_path,
        get_poll_interval,
        get_preview_interval,
        get_preview_lines,
        load_config,
    )

    if not CONFIG_PATH.exists():
        rprint(f"[dim]No config file found at {CONFIG_PATH}[/dim]")
        rprint("[dim]Run 'agentmux config init' to create one[/dim]")

    config = load_config()
    effective = {
        "poll_interval": get_poll_interval(config),
        "preview_interval": get_preview_interval(config),
        "capture_lines": get_capture_lines(config),
        "preview_lines": get_preview_lines(config),
        "history_path": str(get_history_path(config)),
        "attention_patterns": get_attention_patterns(config),
    }

    rprint(f"[bold]Configuration[/bold] ({CONFIG_PATH}):\n")
    for key, value in effective.items():
        source = "" if key in config else "  [dim](default)[/dim]"
        rprint(f"  {key}: {escape(str(value))}{source}")


@config_app.command("path")
def config_path():
    """Show the config file path."""
    from ..config import CONFIG_PATH
    print(CONFIG_PATH)
