"""
Pure navigation logic over the flattened workspace list.

The TUI shows workspaces as non-selectable header rows, each followed by
its panes. These functions move a cursor over that flat list without ever
landing on a header. All of them are pure: indices in, index out.

Items are rebuilt with the workspaces on every poll, so an index is only
meaningful against the workspace list it was built from.
"""

from dataclasses import dataclass
from typing import List, Optional

from .models import Pane, Workspace
from .status_constants import STATUS_NEEDS_ATTENTION

ITEM_WORKSPACE = "workspace"
ITEM_PANE = "pane"


@dataclass(frozen=True)
class NavItem:
    """One visible row: a workspace header or a pane."""
    kind: str
    workspace_index: int
    pane_index: int = 0

    @property
    def selectable(self) -> bool:
        return self.kind == ITEM_PANE


def flatten_workspaces(workspaces: List[Workspace]) -> List[NavItem]:
    """Build the flat row list: each header followed by its panes."""
    items = []
    for wi, workspace in enumerate(workspaces):
        items.append(NavItem(ITEM_WORKSPACE, wi))
        for pi in range(len(workspace.panes)):
            items.append(NavItem(ITEM_PANE, wi, pi))
    return items


def next_selectable(items: List[NavItem], current: int) -> int:
    """Index of the next pane row after `current`, or `current` if none."""
    for i in range(current + 1, len(items)):
        if items[i].selectable:
            return i
    return current


def prev_selectable(items: List[NavItem], current: int) -> int:
    """Index of the previous pane row before `current`, or `current` if none."""
    for i in range(min(current, len(items)) - 1, -1, -1):
        if items[i].selectable:
            return i
    return current


def nearest_selectable(items: List[NavItem], current: int) -> int:
    """Closest pane row to `current` after the list was rebuilt.

    Clamps into range and keeps the position if it is a pane. Otherwise
    prefers the pane above (the row that slides into place when the
    selected pane disappears), then the one below, then 0.
    """
    if not items:
        return 0
    current = max(0, min(current, len(items) - 1))
    if items[current].selectable:
        return current
    prev = prev_selectable(items, current)
    if prev != current:
        return prev
    nxt = next_selectable(items, current)
    if nxt != current:
        return nxt
    return 0


def first_selectable(items: List[NavItem]) -> int:
    """Index of the first pane row, or 0."""
    for i, item in enumerate(items):
        if item.selectable:
            return i
    return 0


def pane_at(items: List[NavItem], workspaces: List[Workspace], index: int) -> Optional[Pane]:
    """The pane under a row index, or None for headers and out-of-range."""
    if not 0 <= index < len(items):
        return None
    item = items[index]
    if not item.selectable:
        return None
    return workspaces[item.workspace_index].panes[item.pane_index]


def first_needing_attention(items: List[NavItem], workspaces: List[Workspace]) -> int:
    """Index of the first pane needing attention, else the first pane, else 0."""
    for i in range(len(items)):
        pane = pane_at(items, workspaces, i)
        if pane is not None and pane.status == STATUS_NEEDS_ATTENTION:
            return i
    return first_selectable(items)


def visible_slice(total: int, cursor: int, height: int) -> int:
    """First row to draw so the cursor stays on screen."""
    if height <= 0 or total <= height:
        return 0
    start = 0
    if cursor >= height:
        start = cursor - height + 1
    if start + height > total:
        start = total - height
    return start
