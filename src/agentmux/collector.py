"""
Agent pane collection pipeline.

One collection cycle:

1. fan out three independent reads to a thread pool - tmux panes, the ps
   process tree, and the activity history - and join them
2. resolve each pane's agent through the detector registry, dropping panes
   that run no agent
3. classify each pane, one after another (tmux serializes capture-pane
   behind a server lock, so parallel captures would only contend)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from .config import get_attention_patterns, get_capture_lines, get_history_path, load_config
from .detectors import DetectorRegistry, build_default_registry
from .exceptions import CollectionError
from .history_reader import HistoryFile, timestamp_to_datetime
from .models import Pane, RawPane
from .process_table import ProcessTree, load_process_tree
from .protocols import SubprocessInterface, TmuxInterface
from .status_constants import STATUS_IDLE
from .status_detector import StatusDetector
from .status_patterns import StatusPatterns, get_patterns
from .tmux_utils import parse_pane_rows

logger = logging.getLogger(__name__)

# (raw pane, resolved agent command)
AgentPane = Tuple[RawPane, str]


class PaneCollector:
    """Collects and classifies agent panes.

    All collaborators are injected; defaults are the real tmux server, the
    real ps, the default history file and the built-in detectors.
    """

    def __init__(
        self,
        tmux: Optional[TmuxInterface] = None,
        processes: Optional[SubprocessInterface] = None,
        history: Optional[HistoryFile] = None,
        registry: Optional[DetectorRegistry] = None,
        patterns: Optional[StatusPatterns] = None,
        capture_lines: int = 10,
    ):
        if tmux is None:
            from .implementations import RealTmux
            tmux = RealTmux()
        if processes is None:
            from .implementations import RealSubprocess
            processes = RealSubprocess()
        self.tmux = tmux
        self.processes = processes
        self.history = history if history is not None else HistoryFile()
        self.registry = registry if registry is not None else build_default_registry()
        self.detector = StatusDetector(tmux, patterns=patterns, capture_lines=capture_lines)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, tmux: Optional[TmuxInterface] = None) -> "PaneCollector":
        """Build a collector honouring the user's config file."""
        if config is None:
            config = load_config()
        return cls(
            tmux=tmux,
            history=HistoryFile(get_history_path(config)),
            patterns=get_patterns(get_attention_patterns(config)),
            capture_lines=get_capture_lines(config),
        )

    def snapshot(self) -> Tuple[List[RawPane], ProcessTree, Dict[str, int]]:
        """Gather panes, process tree and history concurrently.

        Raises:
            CollectionError: if tmux pane enumeration fails
        """
        with ThreadPoolExecutor(max_workers=3) as executor:
            panes_future = executor.submit(self.tmux.list_panes)
            tree_future = executor.submit(load_process_tree, self.processes)
            history_future = executor.submit(self.history.last_active_by_project)
            rows = panes_future.result()
            tree = tree_future.result()
            history = history_future.result()

        if rows is None:
            raise CollectionError("tmux list-panes failed")
        return parse_pane_rows(rows), tree, history

    def resolve_agents(self, raw_panes: List[RawPane], tree: ProcessTree) -> List[AgentPane]:
        """Keep only panes running a registered agent, with its command."""
        agents = []
        for raw in raw_panes:
            agent = self.registry.resolve(raw.command, raw.pid, tree)
            if agent is None:
                continue
            agents.append((raw, agent))
        return agents

    def _build_pane(self, raw: RawPane, agent: str, status: str, history: Dict[str, int]) -> Pane:
        return Pane(
            target=raw.target,
            session=raw.session,
            window=raw.window,
            pane=raw.pane,
            path=raw.path,
            pid=raw.pid,
            agent=agent,
            status=status,
            last_active=timestamp_to_datetime(history.get(raw.path)),
        )

    def list_panes_basic(self) -> List[Pane]:
        """Agent panes without status detection (all idle).

        Skips the per-pane captures, so it is fast enough to call
        synchronously before the first frame.
        """
        raw_panes, tree, history = self.snapshot()
        return [
            self._build_pane(raw, agent, STATUS_IDLE, history)
            for raw, agent in self.resolve_agents(raw_panes, tree)
        ]

    def list_panes(self) -> List[Pane]:
        """Agent panes with full status detection.

        Raises:
            CollectionError: if tmux pane enumeration fails
        """
        raw_panes, tree, history = self.snapshot()
        panes = []
        for raw, agent in self.resolve_agents(raw_panes, tree):
            status = self.detector.detect_status(raw, self.registry.get(agent), tree)
            panes.append(self._build_pane(raw, agent, status, history))
        logger.debug("Collected %d agent panes from %d tmux panes", len(panes), len(raw_panes))
        return panes
