"""
Real implementations of protocol interfaces.

These are production implementations that use libtmux for tmux operations
and subprocess for everything else.
"""

import logging
import os
import subprocess
from typing import Optional, List, Dict, Any

import libtmux
from libtmux.exc import LibTmuxException

logger = logging.getLogger(__name__)

# One row per pane: target, foreground command, working directory, pane pid
PANE_FORMAT = (
    "#{session_name}:#{window_index}.#{pane_index}"
    "\t#{pane_current_command}"
    "\t#{pane_current_path}"
    "\t#{pane_pid}"
)


class RealTmux:
    """Production implementation of TmuxInterface using libtmux.

    Every call goes through Server.cmd, which runs one tmux subprocess and
    returns its split stdout/stderr; nothing is cached between calls since
    panes come and go between polls.
    """

    def __init__(self, socket_name: Optional[str] = None):
        """Initialize with optional socket name for test isolation.

        If no socket_name is provided, checks AGENTMUX_TMUX_SOCKET env var.
        """
        self._socket_name = socket_name or os.environ.get("AGENTMUX_TMUX_SOCKET")
        self._server: Optional[libtmux.Server] = None

    @property
    def server(self) -> libtmux.Server:
        """Lazy-load the tmux server connection."""
        if self._server is None:
            if self._socket_name:
                self._server = libtmux.Server(socket_name=self._socket_name)
            else:
                self._server = libtmux.Server()
        return self._server

    def _cmd(self, *args: str) -> Optional[List[str]]:
        """Run a tmux command, returning stdout lines or None on failure."""
        try:
            result = self.server.cmd(*args)
        except LibTmuxException as e:
            logger.warning("tmux %s failed: %s", args[0], e)
            return None
        if result.returncode != 0:
            logger.debug("tmux %s exited %s: %s", args[0], result.returncode, result.stderr)
            return None
        return result.stdout

    def list_panes(self) -> Optional[List[str]]:
        return self._cmd("list-panes", "-a", "-F", PANE_FORMAT)

    def capture_pane(self, target: str, lines: Optional[int] = None,
                     escape_sequences: bool = False) -> Optional[str]:
        args = ["capture-pane", "-p", "-t", target]
        if escape_sequences:
            args.append("-e")
        if lines is not None:
            args.extend(["-S", f"-{lines}"])
        captured = self._cmd(*args)
        if captured is None:
            return None
        return "\n".join(captured)

    def switch_client(self, target: str) -> bool:
        return self._cmd("switch-client", "-t", target) is not None

    def select_pane(self, target: str) -> bool:
        return self._cmd("select-pane", "-t", target) is not None

    def count_panes(self, window_target: str) -> Optional[int]:
        rows = self._cmd("list-panes", "-t", window_target)
        if rows is None:
            return None
        return len([row for row in rows if row.strip()])

    def kill_pane(self, target: str) -> bool:
        return self._cmd("kill-pane", "-t", target) is not None

    def kill_window(self, window_target: str) -> bool:
        return self._cmd("kill-window", "-t", window_target) is not None


class RealSubprocess:
    """Production implementation of SubprocessInterface"""

    def run(self, cmd: List[str], timeout: Optional[int] = None,
            capture_output: bool = True) -> Optional[Dict[str, Any]]:
        try:
            result = subprocess.run(
                cmd, timeout=timeout, capture_output=capture_output,
                text=True, errors="replace",
            )
            return {
                'returncode': result.returncode,
                'stdout': result.stdout if capture_output else '',
                'stderr': result.stderr if capture_output else ''
            }
        except (subprocess.TimeoutExpired, subprocess.SubprocessError, OSError):
            return None
