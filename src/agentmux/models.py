"""
Data model for discovered agent panes.

Everything here is rebuilt from scratch on every poll cycle; nothing is
patched in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .status_constants import STATUS_IDLE


@dataclass(frozen=True)
class RawPane:
    """A parsed `tmux list-panes` row, before agent resolution."""
    target: str  # e.g. "main:2.1"
    session: str
    window: str
    pane: str
    path: str
    command: str  # pane_current_command
    pid: int  # pane_pid, usually the shell


@dataclass(frozen=True)
class Pane:
    """A tmux pane running a recognised coding agent."""
    target: str
    session: str
    window: str
    pane: str
    path: str
    pid: int
    agent: str
    status: str = STATUS_IDLE
    last_active: Optional[datetime] = None

    @property
    def label(self) -> str:
        """session:window, as shown in the list."""
        return f"{self.session}:{self.window}"


@dataclass
class Workspace:
    """Panes sharing one working directory."""
    path: str
    short_path: str
    git_branch: Optional[str] = None
    panes: List[Pane] = field(default_factory=list)
