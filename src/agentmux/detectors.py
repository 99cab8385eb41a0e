"""
Agent detectors.

A detector pairs an agent's command name with a busy predicate. Agents
signal "working" differently: Claude Code keeps a `caffeinate` helper alive
under its process while it works, the others print an interrupt hint at the
bottom of the pane. Each detector carries its own predicate so the
classifier never needs to know which agent it is looking at.

The registry is built once at startup (build_default_registry) and passed
into the collector; nothing registers into it afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .process_table import ProcessTree, basename

BusyPredicate = Callable[[List[str], int, ProcessTree], bool]


class AgentKind(Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    CODEX = "codex"
    OPENCODE = "opencode"


@dataclass(frozen=True)
class Detector:
    """Recognises one agent and decides whether it is busy."""
    kind: AgentKind
    command: str
    busy: BusyPredicate

    def is_busy(self, lines: List[str], pid: int, tree: ProcessTree) -> bool:
        return self.busy(lines, pid, tree)


def output_contains(hint: str) -> BusyPredicate:
    """Busy while any captured line contains `hint`."""
    def predicate(lines: List[str], pid: int, tree: ProcessTree) -> bool:
        return any(hint in line for line in reversed(lines))
    return predicate


def has_grandchild(name: str) -> BusyPredicate:
    """Busy while the pane's process has a grandchild running `name`."""
    def predicate(lines: List[str], pid: int, tree: ProcessTree) -> bool:
        return tree.has_grandchild(pid, name)
    return predicate


# Claude Code spawns caffeinate while working and kills it when idle.
CLAUDE = Detector(AgentKind.CLAUDE, "claude", has_grandchild("caffeinate"))
# "⠹ Investigating the Project (esc to cancel, 8s)"
GEMINI = Detector(AgentKind.GEMINI, "gemini", output_contains("esc to cancel"))
# "• Working (11s • esc to interrupt)"
CODEX = Detector(AgentKind.CODEX, "codex", output_contains("esc to interrupt"))
OPENCODE = Detector(AgentKind.OPENCODE, "opencode", output_contains("esc interrupt"))

BUILTIN_DETECTORS = [CLAUDE, GEMINI, CODEX, OPENCODE]


class DetectorRegistry:
    """Detectors keyed by agent command name."""

    def __init__(self, detectors: Optional[List[Detector]] = None):
        self._detectors: Dict[str, Detector] = {}
        for detector in detectors or []:
            self.register(detector)

    def register(self, detector: Detector) -> None:
        """Add a detector; the last registration for a command wins."""
        self._detectors[detector.command] = detector

    def get(self, command: str) -> Optional[Detector]:
        return self._detectors.get(command)

    def __contains__(self, command: str) -> bool:
        return command in self._detectors

    def __len__(self) -> int:
        return len(self._detectors)

    @property
    def commands(self) -> List[str]:
        return sorted(self._detectors)

    def resolve(self, command: str, pid: int, tree: ProcessTree) -> Optional[str]:
        """Find the agent command running in a pane.

        Checks the pane's foreground command first. Agents that run inside
        an interpreter (gemini shows up as "node /opt/homebrew/bin/gemini")
        are found through the direct children of the pane's process: first
        by their command name, then by each argument with its directory
        stripped.

        Returns:
            The registered command name, or None if the pane runs no agent
        """
        if command in self._detectors:
            return command

        for child in tree.child_pids(pid):
            comm = basename(tree.comm.get(child, ""))
            if comm in self._detectors:
                return comm
            for arg in tree.args.get(child, "").split():
                arg = basename(arg)
                if arg in self._detectors:
                    return arg
        return None


def build_default_registry() -> DetectorRegistry:
    """Registry with every built-in detector."""
    return DetectorRegistry(BUILTIN_DETECTORS)
