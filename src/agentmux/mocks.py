"""
In-memory implementations of the protocol interfaces, for tests.

MockTmux models a tmux server as a dict of panes keyed by target and
records every mutating call; MockSubprocess returns canned results keyed
by command.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from .tmux_utils import parse_target


@dataclass
class MockPane:
    target: str
    command: str = "claude"
    path: str = "/home/user/project"
    pid: int = 1000
    content: str = ""


class MockTmux:
    """Mock implementation of TmuxInterface for testing.

    Set `failing` to the names of methods that should fail (return None or
    False) to simulate tmux errors.
    """

    def __init__(self):
        self.panes: Dict[str, MockPane] = {}
        self.calls: List[Tuple[str, str]] = []
        self.failing: Set[str] = set()
        self.current_window: Optional[str] = None
        self.current_pane: Optional[str] = None

    def add_pane(
        self,
        target: str,
        command: str = "claude",
        path: str = "/home/user/project",
        pid: int = 1000,
        content: str = "",
    ) -> MockPane:
        pane = MockPane(target, command, path, pid, content)
        self.panes[target] = pane
        return pane

    def set_pane_content(self, target: str, content: str) -> None:
        self.panes[target].content = content

    def _window_of(self, target: str) -> str:
        session, window, _ = parse_target(target)
        return f"{session}:{window}"

    def list_panes(self) -> Optional[List[str]]:
        if "list_panes" in self.failing:
            return None
        return [
            f"{p.target}\t{p.command}\t{p.path}\t{p.pid}"
            for p in self.panes.values()
        ]

    def capture_pane(self, target: str, lines: Optional[int] = None,
                     escape_sequences: bool = False) -> Optional[str]:
        self.calls.append(("capture_pane", target))
        if "capture_pane" in self.failing or target not in self.panes:
            return None
        content = self.panes[target].content
        if lines is not None:
            content = "\n".join(content.split("\n")[-lines:])
        return content

    def switch_client(self, target: str) -> bool:
        self.calls.append(("switch_client", target))
        if "switch_client" in self.failing:
            return False
        if not any(self._window_of(t) == target for t in self.panes):
            return False
        self.current_window = target
        return True

    def select_pane(self, target: str) -> bool:
        self.calls.append(("select_pane", target))
        if "select_pane" in self.failing or target not in self.panes:
            return False
        self.current_pane = target
        return True

    def count_panes(self, window_target: str) -> Optional[int]:
        if "count_panes" in self.failing:
            return None
        return len([t for t in self.panes if self._window_of(t) == window_target])

    def kill_pane(self, target: str) -> bool:
        self.calls.append(("kill_pane", target))
        if "kill_pane" in self.failing or target not in self.panes:
            return False
        del self.panes[target]
        return True

    def kill_window(self, window_target: str) -> bool:
        self.calls.append(("kill_window", window_target))
        if "kill_window" in self.failing:
            return False
        doomed = [t for t in self.panes if self._window_of(t) == window_target]
        if not doomed:
            return False
        for target in doomed:
            del self.panes[target]
        return True


class MockSubprocess:
    """Mock implementation of SubprocessInterface for testing."""

    def __init__(self):
        self.responses: Dict[Tuple[str, ...], Optional[Dict[str, Any]]] = {}
        self.commands: List[List[str]] = []

    def set_response(self, cmd: List[str], stdout: str = "", returncode: int = 0,
                     stderr: str = "") -> None:
        self.responses[tuple(cmd)] = {
            "returncode": returncode,
            "stdout": stdout,
            "stderr": stderr,
        }

    def set_failure(self, cmd: List[str]) -> None:
        """Make cmd behave as if it could not be run at all."""
        self.responses[tuple(cmd)] = None

    def run(self, cmd: List[str], timeout: Optional[int] = None,
            capture_output: bool = True) -> Optional[Dict[str, Any]]:
        self.commands.append(list(cmd))
        key = tuple(cmd)
        if key in self.responses:
            return self.responses[key]
        return {"returncode": 0, "stdout": "", "stderr": ""}
