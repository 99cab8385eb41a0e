"""
Dashboard display state.

Holds everything the TUI draws: the workspace tree, its flattened rows, the
cursor, the current collection error and the preview text. Only the UI
event loop mutates it, always from completion callbacks.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import CollectionError
from .models import Pane, Workspace
from .navigation import (
    NavItem,
    first_needing_attention,
    first_selectable,
    flatten_workspaces,
    nearest_selectable,
    next_selectable,
    pane_at,
    prev_selectable,
)
from .status_constants import is_user_blocked
from .workspaces import group_by_workspace


@dataclass
class DashboardState:
    """Cursor-addressable view of the latest collection."""
    workspaces: List[Workspace] = field(default_factory=list)
    items: List[NavItem] = field(default_factory=list)
    cursor: int = 0
    error: Optional[CollectionError] = None
    loaded: bool = False
    # True once a cycle with full status detection has been applied
    status_loaded: bool = False
    preview_target: Optional[str] = None
    preview_content: str = ""

    def _rebuild(self, panes: List[Pane]) -> None:
        self.workspaces = group_by_workspace(panes)
        self.items = flatten_workspaces(self.workspaces)

    def apply_basic(self, panes: List[Pane]) -> None:
        """Apply the fast, status-less listing shown on the first frame."""
        self.loaded = True
        self.error = None
        self._rebuild(panes)
        self.cursor = first_selectable(self.items)

    def apply_panes(self, panes: List[Pane]) -> None:
        """Apply a classified listing.

        The first one jumps the cursor to the first pane needing attention;
        later ones keep the cursor as close as possible to where it was.
        """
        self.loaded = True
        self.error = None
        first_status = not self.status_loaded
        self.status_loaded = True
        self._rebuild(panes)
        if first_status:
            self.cursor = first_needing_attention(self.items, self.workspaces)
        else:
            self.cursor = nearest_selectable(self.items, self.cursor)
        if self.selected_target is None:
            # Every pane is gone; don't keep showing a dead capture
            self.preview_target = None
            self.preview_content = ""

    def apply_error(self, error: CollectionError) -> None:
        """Record a failed collection; the previous tree is kept."""
        self.loaded = True
        self.error = error

    def apply_preview(self, target: str, content: str) -> bool:
        """Store preview text. Returns False if nothing changed."""
        self.preview_target = target
        content = content.rstrip("\n")
        if content == self.preview_content:
            return False
        self.preview_content = content
        return True

    @property
    def selected_pane(self) -> Optional[Pane]:
        return pane_at(self.items, self.workspaces, self.cursor)

    @property
    def selected_target(self) -> Optional[str]:
        pane = self.selected_pane
        return pane.target if pane else None

    def move_next(self) -> bool:
        """Move the cursor down one pane. Returns True if it moved."""
        nxt = next_selectable(self.items, self.cursor)
        moved = nxt != self.cursor
        self.cursor = nxt
        return moved

    def move_prev(self) -> bool:
        """Move the cursor up one pane. Returns True if it moved."""
        prev = prev_selectable(self.items, self.cursor)
        moved = prev != self.cursor
        self.cursor = prev
        return moved

    def jump_to_attention(self) -> bool:
        """Move the cursor to the first pane needing attention.

        Returns False (cursor untouched) if no pane needs attention.
        """
        target = first_needing_attention(self.items, self.workspaces)
        pane = pane_at(self.items, self.workspaces, target)
        if pane is None or not is_user_blocked(pane.status):
            return False
        self.cursor = target
        return True
