"""
Backpressure-driven polling.

Two independent cadences refresh the dashboard: a full collection cycle
(about every 2s) and a preview capture (about every 200ms). Neither uses a
free-running interval timer. The next tick of a cadence is armed only from
the completion handler of its previous cycle, so a slow tmux server delays
the cycles instead of piling them up.

Each cadence is a two-state machine:

    IDLE --begin()--> AWAITING_RESULT --finish()--> IDLE

A tick is only acted on from IDLE. Every arm() bumps a generation number,
and a tick carrying an older generation is dropped, so on-demand refreshes
(manual refresh, after killing a pane) never start a second tick chain.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, TypeVar

from .dashboard_state import DashboardState
from .exceptions import CollectionError
from .models import Pane

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PANES_INTERVAL = 2.0
DEFAULT_PREVIEW_INTERVAL = 0.2


class Scheduler(Protocol):
    """Event-loop services the orchestrator needs.

    call_later runs a callback on the loop after a delay. submit runs a job
    off the loop and then runs on_done(result) back on the loop.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        ...

    def submit(self, job: Callable[[], T], on_done: Callable[[T], None]) -> None:
        ...


class CadenceState(Enum):
    IDLE = "idle"
    AWAITING_RESULT = "awaiting_result"


class Cadence:
    """Tick state for one refresh loop."""

    def __init__(self, name: str, interval: float):
        self.name = name
        self.interval = interval
        self.state = CadenceState.IDLE
        self.generation = 0
        self.stopped = False

    @property
    def is_idle(self) -> bool:
        return self.state is CadenceState.IDLE

    def begin(self) -> bool:
        """Start a cycle. Returns False if one is in flight or we stopped."""
        if self.stopped or not self.is_idle:
            return False
        self.state = CadenceState.AWAITING_RESULT
        return True

    def finish(self) -> None:
        self.state = CadenceState.IDLE

    def arm(self) -> int:
        """Invalidate outstanding ticks and return the new tick's generation."""
        self.generation += 1
        return self.generation

    def stop(self) -> None:
        self.stopped = True


@dataclass
class PanesResult:
    panes: List[Pane] = field(default_factory=list)
    error: Optional[CollectionError] = None


@dataclass
class PreviewResult:
    target: str
    content: str


class PollOrchestrator:
    """Runs the collection and preview cadences against a DashboardState."""

    def __init__(
        self,
        state: DashboardState,
        load_panes: Callable[[], List[Pane]],
        load_preview: Callable[[str], str],
        scheduler: Scheduler,
        panes_interval: float = DEFAULT_PANES_INTERVAL,
        preview_interval: float = DEFAULT_PREVIEW_INTERVAL,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.state = state
        self._load_panes = load_panes
        self._load_preview = load_preview
        self._scheduler = scheduler
        self._on_change = on_change or (lambda: None)
        self.panes = Cadence("panes", panes_interval)
        self.preview = Cadence("preview", preview_interval)

    # ── Lifecycle ─────────────────────────────────────────────────────

    def start(self) -> None:
        """Kick off the first cycle of both cadences.

        No timers are armed here; the completion handlers start the chains.
        """
        self._start_panes_load()
        self._start_preview_load()

    def stop(self) -> None:
        """Stop scheduling. Cycles already in flight finish silently."""
        self.panes.stop()
        self.preview.stop()

    @property
    def stopped(self) -> bool:
        return self.panes.stopped and self.preview.stopped

    def _arm(self, cadence: Cadence, tick: Callable[[int], None]) -> None:
        if cadence.stopped:
            return
        generation = cadence.arm()
        self._scheduler.call_later(cadence.interval, lambda: tick(generation))

    # ── Panes cadence ─────────────────────────────────────────────────

    def _collect(self) -> PanesResult:
        try:
            return PanesResult(panes=self._load_panes())
        except CollectionError as e:
            return PanesResult(error=e)
        except Exception as e:
            # Anything else still ends the cycle, so the cadence re-arms
            logger.exception("Unexpected error while collecting panes")
            return PanesResult(error=CollectionError(str(e)))

    def _start_panes_load(self) -> bool:
        if not self.panes.begin():
            return False
        self._scheduler.submit(self._collect, self._on_panes_loaded)
        return True

    def _on_panes_tick(self, generation: int) -> None:
        if generation != self.panes.generation:
            return
        self._start_panes_load()

    def _on_panes_loaded(self, result: PanesResult) -> None:
        self.panes.finish()
        if self.panes.stopped:
            return

        if result.error is not None:
            logger.warning("Collection failed: %s", result.error)
            self.state.apply_error(result.error)
        else:
            self.state.apply_panes(result.panes)
        self._on_change()

        # Keep ticking even on error
        self._arm(self.panes, self._on_panes_tick)
        self.refresh_preview()

    def request_panes_refresh(self) -> bool:
        """Run a collection now unless one is already in flight."""
        return self._start_panes_load()

    # ── Preview cadence ───────────────────────────────────────────────

    def _capture(self, target: str) -> PreviewResult:
        try:
            content = self._load_preview(target)
        except Exception as e:
            logger.exception("Unexpected error while capturing %s", target)
            content = f"error: {e}"
        return PreviewResult(target, content)

    def _start_preview_load(self) -> None:
        target = self.state.selected_target
        if target is None:
            # Nothing to preview yet; keep the chain alive
            self._arm(self.preview, self._on_preview_tick)
            return
        if not self.preview.begin():
            return
        self._scheduler.submit(
            lambda: self._capture(target),
            self._on_scheduled_preview_loaded,
        )

    def _on_preview_tick(self, generation: int) -> None:
        if generation != self.preview.generation:
            return
        self._start_preview_load()

    def _on_scheduled_preview_loaded(self, result: PreviewResult) -> None:
        self.preview.finish()
        if self.preview.stopped:
            return
        self._apply_preview(result)
        self._arm(self.preview, self._on_preview_tick)

    def _apply_preview(self, result: PreviewResult) -> None:
        # Drop captures for a pane the cursor has already left
        if result.target != self.state.selected_target:
            return
        if self.state.apply_preview(result.target, result.content):
            self._on_change()

    def refresh_preview(self) -> None:
        """Load the preview now if the selection moved to a new pane.

        This is outside the preview cadence and never re-arms it.
        """
        target = self.state.selected_target
        if target is None or target == self.state.preview_target or self.preview.stopped:
            return
        self._scheduler.submit(
            lambda: self._capture(target),
            self._apply_preview,
        )
