"""
Protocol definitions for external dependencies.

These interfaces allow dependency injection for testing, enabling us to
swap real implementations (tmux and ps subprocess calls) with mock
implementations in tests.
"""

from typing import Protocol, Optional, List, Dict, Any, runtime_checkable


@runtime_checkable
class TmuxInterface(Protocol):
    """Interface for tmux operations"""

    def list_panes(self) -> Optional[List[str]]:
        """List every pane on the server.

        Returns:
            One tab-separated row per pane
            (target, foreground command, working directory, pane pid),
            or None if the enumeration failed
        """
        ...

    def capture_pane(self, target: str, lines: Optional[int] = None,
                     escape_sequences: bool = False) -> Optional[str]:
        """Capture content from a tmux pane.

        Args:
            target: pane target, e.g. "main:2.1"
            lines: scroll-back lines to include; None for the visible area only
            escape_sequences: keep ANSI color codes

        Returns:
            Pane content as string, or None on failure
        """
        ...

    def switch_client(self, target: str) -> bool:
        """Switch the attached client to a session:window."""
        ...

    def select_pane(self, target: str) -> bool:
        """Make a pane the active pane of its window."""
        ...

    def count_panes(self, window_target: str) -> Optional[int]:
        """Count panes in a session:window, or None on failure."""
        ...

    def kill_pane(self, target: str) -> bool:
        """Kill a single pane."""
        ...

    def kill_window(self, window_target: str) -> bool:
        """Kill a whole session:window."""
        ...


@runtime_checkable
class SubprocessInterface(Protocol):
    """Interface for subprocess operations (non-tmux)"""

    def run(self, cmd: List[str], timeout: Optional[int] = None,
            capture_output: bool = True) -> Optional[Dict[str, Any]]:
        """Run a subprocess command.

        Args:
            cmd: command and arguments
            timeout: timeout in seconds
            capture_output: whether to capture stdout/stderr

        Returns:
            Dict with 'returncode', 'stdout', 'stderr', or None on failure
        """
        ...
