"""
Shared tmux utilities for agentmux.

Parsing of pane listings and targets, pane capture helpers, and the pane
lifecycle actions (switch to, kill) used by the TUI. All tmux access goes
through a TmuxInterface so these functions can be tested with a mock.
"""

import logging
from typing import List, Optional, Tuple

from .exceptions import ActionError, ParseError
from .models import RawPane
from .protocols import TmuxInterface

logger = logging.getLogger(__name__)


def parse_target(target: str) -> Tuple[str, str, str]:
    """Split a target like "main:2.1" into (session, window, pane).

    Splits on the last ":" and then the last "."; a target without ":" is
    a bare session name.

    Examples:
        "main:2.1" -> ("main", "2", "1")
        "main:2"   -> ("main", "2", "")
        "main"     -> ("main", "", "")
    """
    session, sep, rest = target.rpartition(":")
    if not sep:
        return target, "", ""
    window, sep, pane = rest.rpartition(".")
    if not sep:
        return session, rest, ""
    return session, window, pane


def parse_pane_row(line: str) -> RawPane:
    """Parse one tab-separated `target cmd path pid` row.

    Raises:
        ParseError: if the row has fewer than four fields
    """
    fields = line.split("\t", 3)
    if len(fields) < 4:
        raise ParseError(f"expected 4 fields, got {len(fields)}", line)
    target, command, path, pid_str = fields
    try:
        pid = int(pid_str.strip())
    except ValueError:
        pid = 0
    session, window, pane = parse_target(target)
    return RawPane(
        target=target,
        session=session,
        window=window,
        pane=pane,
        path=path,
        command=command,
        pid=pid,
    )


def parse_pane_rows(rows: List[str]) -> List[RawPane]:
    """Parse pane rows, silently dropping blank and malformed ones."""
    panes = []
    for row in rows:
        row = row.rstrip("\n")
        if not row:
            continue
        try:
            panes.append(parse_pane_row(row))
        except ParseError as e:
            logger.debug("Skipping pane row %r: %s", e.line, e)
    return panes


def capture_pane_lines(tmux: TmuxInterface, target: str, count: int = 10) -> List[str]:
    """Capture the last `count` visible lines of a pane as plain text.

    Returns an empty list if the capture fails.
    """
    content = tmux.capture_pane(target)
    if content is None:
        return []
    lines = content.rstrip("\n").split("\n")
    return lines[-count:]


def capture_preview(tmux: TmuxInterface, target: str, lines: int = 50) -> str:
    """Capture a pane with colors and scroll-back for the preview pane.

    Never raises; a failed capture yields an "error: ..." line instead.
    """
    content = tmux.capture_pane(target, lines=lines, escape_sequences=True)
    if content is None:
        return f"error: capture-pane {target} failed"
    return content


def switch_to_pane(tmux: TmuxInterface, target: str) -> None:
    """Switch the attached client to the pane's window, then select the pane.

    Raises:
        ActionError: if either tmux call fails
    """
    session, window, _ = parse_target(target)
    window_target = f"{session}:{window}"
    if not tmux.switch_client(window_target):
        raise ActionError(f"switch-client {window_target} failed", target)
    if not tmux.select_pane(target):
        raise ActionError(f"select-pane {target} failed", target)


def kill_pane(tmux: TmuxInterface, target: str) -> None:
    """Kill a pane, or its whole window when it is the window's only pane.

    Raises:
        ActionError: if the pane count or the kill fails
    """
    session, window, _ = parse_target(target)
    window_target = f"{session}:{window}"

    count: Optional[int] = tmux.count_panes(window_target)
    if count is None:
        raise ActionError(f"list-panes {window_target} failed", target)

    if count <= 1:
        logger.info("Killing window %s (last pane %s)", window_target, target)
        if not tmux.kill_window(window_target):
            raise ActionError(f"kill-window {window_target} failed", target)
        return

    logger.info("Killing pane %s", target)
    if not tmux.kill_pane(target):
        raise ActionError(f"kill-pane {target} failed", target)
