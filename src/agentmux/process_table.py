"""
Process tree snapshots.

A single `ps -eo pid,ppid,comm,args` call is parsed into an in-memory
forest so status detection can answer parent/child questions for every pane
without spawning a process per pane.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exceptions import ParseError
from .protocols import SubprocessInterface

logger = logging.getLogger(__name__)

PS_COMMAND = ["ps", "-eo", "pid,ppid,comm,args"]


def basename(command: str) -> str:
    """Strip any directory prefix from a command path."""
    return command.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ProcessNode:
    """One row of the process listing."""
    pid: int
    ppid: int
    comm: str
    args: str = ""


@dataclass
class ProcessTree:
    """Read-only index over a process snapshot.

    children maps a pid to its direct child pids, comm maps a pid to its
    command basename, args maps a pid to its full argument string.
    """
    children: Dict[int, List[int]] = field(default_factory=dict)
    comm: Dict[int, str] = field(default_factory=dict)
    args: Dict[int, str] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ProcessTree":
        return cls()

    @classmethod
    def from_nodes(cls, nodes: List[ProcessNode]) -> "ProcessTree":
        tree = cls()
        for node in nodes:
            tree.children.setdefault(node.ppid, []).append(node.pid)
            tree.comm[node.pid] = node.comm
            if node.args:
                tree.args[node.pid] = node.args
        return tree

    def child_pids(self, pid: int) -> List[int]:
        return self.children.get(pid, [])

    def has_grandchild(self, pid: int, name: str) -> bool:
        """Return True if any grandchild of pid runs a command named `name`."""
        for child in self.child_pids(pid):
            for grandchild in self.child_pids(child):
                if self.comm.get(grandchild) == name:
                    return True
        return False


def parse_process_row(line: str) -> ProcessNode:
    """Parse one `pid ppid comm args...` row.

    Raises:
        ParseError: if the row has fewer than three fields or non-integer ids
    """
    fields = line.split()
    if len(fields) < 3:
        raise ParseError("expected at least 3 fields", line)
    try:
        pid = int(fields[0])
        ppid = int(fields[1])
    except ValueError:
        raise ParseError("pid/ppid is not an integer", line)
    return ProcessNode(
        pid=pid,
        ppid=ppid,
        comm=basename(fields[2]),
        args=" ".join(fields[3:]),
    )


def parse_process_table(output: str) -> ProcessTree:
    """Build a ProcessTree from raw ps output, skipping malformed rows.

    The ps header row fails integer parsing and is skipped like any other
    malformed row.
    """
    nodes = []
    for line in output.strip().splitlines():
        try:
            nodes.append(parse_process_row(line))
        except ParseError:
            continue
    return ProcessTree.from_nodes(nodes)


def load_process_tree(runner: Optional[SubprocessInterface] = None) -> ProcessTree:
    """Snapshot the host's processes.

    Never raises: if ps cannot be run the tree is empty, and status detection
    simply finds no children for any pane.
    """
    if runner is None:
        from .implementations import RealSubprocess
        runner = RealSubprocess()

    try:
        result = runner.run(PS_COMMAND)
    except Exception as e:
        logger.debug("ps raised, using empty process tree: %s", e)
        return ProcessTree.empty()
    if result is None or result.get("returncode") != 0:
        logger.debug("ps failed, using empty process tree: %s", result and result.get("stderr"))
        return ProcessTree.empty()
    return parse_process_table(result.get("stdout") or "")
