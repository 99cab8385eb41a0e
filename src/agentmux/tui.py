"""
Textual TUI for agentmux.

A tree of workspaces and their agent panes on the left, a live capture of
the selected pane on the right. All tmux and filesystem I/O runs in worker
threads; results are applied on the event loop by the PollOrchestrator.
"""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Footer, Header

from . import __version__
from .collector import PaneCollector
from .config import (
    get_poll_interval,
    get_preview_interval,
    get_preview_lines,
    load_config,
)
from .dashboard_state import DashboardState
from .exceptions import CollectionError
from .poller import PollOrchestrator
from .protocols import TmuxInterface
from .tmux_utils import capture_preview
from .tui_actions import NavigationActionsMixin, SessionActionsMixin
from .tui_widgets import ErrorBanner, PaneList, PreviewPane

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TextualScheduler:
    """Scheduler backed by Textual timers and thread workers."""

    def __init__(self, app: "AgentMuxApp"):
        self.app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        return self.app.set_timer(delay, callback)

    def submit(self, job: Callable[[], T], on_done: Callable[[T], None]) -> None:
        self.app._run_job(job, on_done)


class AgentMuxApp(
    NavigationActionsMixin,
    SessionActionsMixin,
    App,
):
    """agentmux dashboard"""

    CSS_PATH = "tui.tcss"

    BINDINGS = [
        ("j", "next_pane", "Next"),
        ("k", "prev_pane", "Prev"),
        Binding("down", "next_pane", "Next", show=False),
        Binding("up", "prev_pane", "Prev", show=False),
        ("a", "jump_to_attention", "Attention"),
        ("enter", "switch_pane", "Switch"),
        ("d", "kill_pane", "Close pane"),
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        collector: Optional[PaneCollector] = None,
        tmux: Optional[TmuxInterface] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()
        if config is None:
            config = load_config()
        if collector is None:
            collector = PaneCollector.from_config(config, tmux=tmux)
        self.collector = collector
        self.tmux = tmux if tmux is not None else collector.tmux
        self.preview_lines = get_preview_lines(config)
        self._pending_confirmations: Dict[str, tuple] = {}

        self.state = DashboardState()
        # Status-less listing so the first frame already shows the tree
        try:
            self.state.apply_basic(self.collector.list_panes_basic())
        except CollectionError as e:
            logger.warning("Initial listing failed: %s", e)
            self.state.apply_error(e)

        self.orchestrator = PollOrchestrator(
            self.state,
            load_panes=self.collector.list_panes,
            load_preview=self._load_preview,
            scheduler=TextualScheduler(self),
            panes_interval=get_poll_interval(config),
            preview_interval=get_preview_interval(config),
            on_change=self._refresh_view,
        )

    def compose(self) -> ComposeResult:
        """Create child widgets"""
        yield Header()
        yield ErrorBanner(id="error-banner")
        with Horizontal(id="main"):
            yield PaneList(id="pane-list")
            yield PreviewPane(id="preview")
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"agentmux v{__version__}"
        self._refresh_view()
        self.orchestrator.start()

    def _load_preview(self, target: str) -> str:
        return capture_preview(self.tmux, target, lines=self.preview_lines)

    @work(thread=True, group="poll")
    def _run_job(self, job: Callable[[], T], on_done: Callable[[T], None]) -> None:
        """Run a poll job off the main thread, then hand its result back."""
        result = job()
        self.call_from_thread(on_done, result)

    def _refresh_pane_list(self) -> None:
        self.query_one("#pane-list", PaneList).set_tree(
            self.state.workspaces, self.state.items, self.state.cursor, loaded=self.state.loaded
        )

    def _refresh_view(self) -> None:
        """Redraw every widget from the dashboard state (no I/O)."""
        try:
            banner = self.query_one("#error-banner", ErrorBanner)
        except NoMatches:
            return
        banner.set_error(self.state.error)
        self._refresh_pane_list()
        self.query_one("#preview", PreviewPane).show(self.state.preview_target or "", self.state.preview_content)


def run_tui() -> None:
    """Run the dashboard until the user quits or switches away."""
    app = AgentMuxApp()
    app.run()
