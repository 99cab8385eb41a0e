"""
One-shot listing: agentmux list.
"""

import json
from typing import Annotated, List

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from ._shared import app, console
from ..models import Pane
from ..status_constants import get_status_label, get_status_symbol
from ..tui_formatters import format_ago
from ..workspaces import group_by_workspace


def _pane_record(workspace: str, pane: Pane) -> dict:
    return {
        "workspace": workspace,
        "target": pane.target,
        "session": pane.session,
        "window": pane.window,
        "pane": pane.pane,
        "path": pane.path,
        "agent": pane.agent,
        "status": pane.status,
        "last_active": pane.last_active.isoformat() if pane.last_active else None,
    }


def _print_agents() -> None:
    from ..detectors import build_default_registry

    for command in build_default_registry().commands:
        print(command)


@app.command("list")
def list_panes(
    as_json: Annotated[
        bool, typer.Option("--json", help="Print JSON instead of a table")
    ] = False,
    agents: Annotated[
        bool, typer.Option("--agents", help="List the agent commands that are detected")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Log collection details to the console")
    ] = False,
):
    """Collect agent panes once and print them."""
    if agents:
        _print_agents()
        return

    from ..collector import PaneCollector
    from ..exceptions import CollectionError
    from ..logging_config import setup_cli_logging

    logger = setup_cli_logging(debug=debug)
    try:
        panes: List[Pane] = PaneCollector.from_config().list_panes()
    except CollectionError as e:
        logger.debug("Collection failed", exc_info=True)
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    workspaces = group_by_workspace(panes)

    if as_json:
        records = [_pane_record(ws.short_path, p) for ws in workspaces for p in ws.panes]
        print(json.dumps(records, indent=2))
        return

    if not panes:
        rprint("[dim]No active sessions found.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Workspace")
    table.add_column("Target")
    table.add_column("Agent")
    table.add_column("Status")
    table.add_column("Last active", justify="right")

    for ws in workspaces:
        name = escape(ws.short_path)
        if ws.git_branch:
            name += f" [dim]{escape(ws.git_branch)}[/dim]"
        for i, pane in enumerate(ws.panes):
            symbol, color = get_status_symbol(pane.status)
            table.add_row(
                name if i == 0 else "",
                pane.target,
                pane.agent,
                f"[{color}]{symbol}[/{color}] {get_status_label(pane.status)}",
                format_ago(pane.last_active),
            )

    console.print(table)
