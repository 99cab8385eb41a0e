"""
Pane list widget for TUI.

Draws the flattened workspace tree: a bold header per workspace (with its
git branch right-aligned) followed by one row per agent pane. Only the
rows that fit are drawn, scrolled so the cursor stays visible.
"""

from datetime import datetime
from typing import List, Optional

from textual.widgets import Static
from rich.text import Text

from ..models import Workspace
from ..navigation import ITEM_WORKSPACE, NavItem, visible_slice
from ..status_constants import STATUS_IDLE, get_status_symbol
from ..tui_formatters import format_ago, truncate

SELECTED_STYLE = "bold bright_white on grey37"
WORKSPACE_STYLE = "bold bright_white"
BRANCH_STYLE = "grey50"
PANE_STYLE = "grey50"


class PaneList(Static):
    """Workspace tree with a cursor"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.workspaces: List[Workspace] = []
        self.items: List[NavItem] = []
        self.cursor: int = 0
        self.loaded: bool = False

    def set_tree(self, workspaces: List[Workspace], items: List[NavItem], cursor: int, loaded: bool = True) -> None:
        self.workspaces = workspaces
        self.items = items
        self.cursor = cursor
        self.loaded = loaded
        self.refresh()

    def render_workspace(self, workspace: Workspace, width: int) -> Text:
        """Header row: " name ... branch ", branch dropped first when narrow."""
        avail = width - 2
        name = workspace.short_path
        branch = workspace.git_branch or ""

        if branch and len(name) + 1 + len(branch) > avail:
            branch_avail = avail - len(name) - 1
            branch = truncate(branch, branch_avail) if branch_avail >= 4 else ""
        if not branch:
            name = truncate(name, avail)

        row = Text()
        head = " " + name
        row.append(head, style=WORKSPACE_STYLE)
        if branch:
            row.append(" " * max(width - len(head) - len(branch) - 1, 0))
            row.append(branch + " ", style=BRANCH_STYLE)
        else:
            row.append(" " * max(width - len(head), 0))
        return row

    def render_pane(self, workspace: Workspace, pane_index: int, selected: bool, width: int,
                    now: Optional[datetime] = None) -> Text:
        """Pane row: status symbol, session:window, agent, elapsed time."""
        pane = workspace.panes[pane_index]
        symbol, color = get_status_symbol(pane.status)
        prefix = "   "
        right = f" {format_ago(pane.last_active, now)} "
        middle = f"{pane.label} {pane.agent}"
        avail = width - len(prefix) - 2 - len(right)
        middle = truncate(middle, avail) if len(middle) > avail else middle
        gap = " " * max(avail - len(middle), 0)

        row = Text()
        if selected:
            row.append(prefix, style=SELECTED_STYLE)
            row.append(symbol, style=f"{color} on grey37")
            row.append(f" {middle}{gap}{right}", style=SELECTED_STYLE)
        else:
            row.append(prefix, style=PANE_STYLE)
            row.append(symbol, style=color if pane.status != STATUS_IDLE else PANE_STYLE)
            row.append(f" {middle}", style=PANE_STYLE)
            row.append(f"{gap}{right}", style="dim")
        return row

    def render(self) -> Text:
        content = Text()
        if not self.loaded:
            return content
        if not self.items:
            content.append("No active sessions found.\nPress q to quit.", style="grey50")
            return content

        width = self.size.width if self.size.width > 0 else 30
        height = self.size.height if self.size.height > 0 else len(self.items)
        start = visible_slice(len(self.items), self.cursor, height)
        end = min(start + height, len(self.items))
        now = datetime.now()

        for i in range(start, end):
            item = self.items[i]
            workspace = self.workspaces[item.workspace_index]
            if item.kind == ITEM_WORKSPACE:
                content.append_text(self.render_workspace(workspace, width))
            else:
                content.append_text(self.render_pane(workspace, item.pane_index, i == self.cursor, width, now))
            if i < end - 1:
                content.append("\n")
        return content
