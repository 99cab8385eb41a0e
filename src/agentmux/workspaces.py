"""
Group panes into workspaces by working directory.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from .models import Pane, Workspace


def _home_dir() -> Optional[str]:
    try:
        return str(Path.home())
    except RuntimeError:
        return None


def collapse_home(path: str, home: Optional[str]) -> str:
    """Replace a leading home directory with "~"."""
    if home and (path == home or path.startswith(home.rstrip("/") + "/")):
        return "~" + path[len(home.rstrip("/")):]
    return path


def short_path(path: str, home: Optional[str] = None) -> str:
    """Display name for a workspace: its last path segment.

    Falls back to the full path (home collapsed to "~") when the last
    segment is empty or the root.
    """
    name = os.path.basename(path.rstrip("/"))
    if name in ("", ".", "/"):
        return collapse_home(path, home)
    return name


def _read_head(git_dir: Path) -> Optional[str]:
    try:
        return (git_dir / "HEAD").read_text().strip()
    except (OSError, UnicodeDecodeError):
        return None


def git_branch(directory: str) -> Optional[str]:
    """Current git branch of a directory, read from .git/HEAD.

    Reads the ref file directly instead of running git. Worktrees, whose
    .git is a "gitdir: <path>" pointer file, are followed. A detached HEAD
    shows the first 8 characters of the commit hash.

    Returns:
        Branch name, short hash, or None if not a git checkout
    """
    dot_git = Path(directory) / ".git"
    if dot_git.is_file():
        try:
            pointer = dot_git.read_text().strip()
        except (OSError, UnicodeDecodeError):
            return None
        if not pointer.startswith("gitdir:"):
            return None
        git_dir = Path(pointer[len("gitdir:"):].strip())
        if not git_dir.is_absolute():
            git_dir = Path(directory) / git_dir
    else:
        git_dir = dot_git

    ref = _read_head(git_dir)
    if not ref:
        return None
    prefix = "ref: refs/heads/"
    if ref.startswith(prefix):
        return ref[len(prefix):]
    return ref[:8]


def group_by_workspace(panes: List[Pane], home: Optional[str] = None) -> List[Workspace]:
    """Group panes by working directory.

    Panes keep their discovery order within a workspace; workspaces are
    sorted by path so the list (and the cursor) is stable across polls.
    """
    if home is None:
        home = _home_dir()

    groups: Dict[str, List[Pane]] = {}
    for pane in panes:
        groups.setdefault(pane.path, []).append(pane)

    return [
        Workspace(
            path=path,
            short_path=short_path(path, home),
            git_branch=git_branch(path),
            panes=groups[path],
        )
        for path in sorted(groups)
    ]
