"""
Unit tests for the backpressure-driven poll orchestrator.

A FakeScheduler stands in for the event loop: timers and jobs queue up and
only run when the test says so, which makes in-flight states observable.
"""

import pytest

from agentmux.dashboard_state import DashboardState
from agentmux.exceptions import CollectionError
from agentmux.poller import Cadence, CadenceState, PollOrchestrator
from agentmux.status_constants import STATUS_NEEDS_ATTENTION
from tests.fixtures import make_pane


class FakeScheduler:
    def __init__(self):
        self.timers = []  # (delay, callback)
        self.jobs = []  # (job, on_done)

    def call_later(self, delay, callback):
        self.timers.append((delay, callback))

    def submit(self, job, on_done):
        self.jobs.append((job, on_done))

    def run_jobs(self):
        jobs, self.jobs = self.jobs, []
        for job, on_done in jobs:
            on_done(job())

    def fire_timers(self):
        timers, self.timers = self.timers, []
        for _, callback in timers:
            callback()

    def delays(self):
        return sorted(delay for delay, _ in self.timers)


class Loader:
    def __init__(self, panes=None):
        self.panes = panes if panes is not None else [make_pane("s:1.0", path="/a")]
        self.error = None
        self.pane_calls = 0
        self.preview_calls = []

    def load_panes(self):
        self.pane_calls += 1
        if self.error:
            raise self.error
        return self.panes

    def load_preview(self, target):
        self.preview_calls.append(target)
        return f"content of {target}"


@pytest.fixture
def setup():
    state = DashboardState()
    loader = Loader()
    scheduler = FakeScheduler()
    changes = []
    orchestrator = PollOrchestrator(
        state,
        load_panes=loader.load_panes,
        load_preview=loader.load_preview,
        scheduler=scheduler,
        panes_interval=2.0,
        preview_interval=0.2,
        on_change=lambda: changes.append(1),
    )
    return state, loader, scheduler, orchestrator, changes


class TestCadence:
    """Test the cadence state machine"""

    def test_begin_only_from_idle(self):
        cadence = Cadence("panes", 2.0)
        assert cadence.begin() is True
        assert cadence.state is CadenceState.AWAITING_RESULT
        assert cadence.begin() is False
        cadence.finish()
        assert cadence.is_idle

    def test_arm_bumps_generation(self):
        cadence = Cadence("panes", 2.0)
        assert cadence.arm() == 1
        assert cadence.arm() == 2

    def test_stopped_never_begins(self):
        cadence = Cadence("panes", 2.0)
        cadence.stop()
        assert cadence.begin() is False


class TestStart:
    """Test the initial kick-off"""

    def test_start_loads_without_arming(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        state.apply_basic(loader.panes)
        orchestrator.start()
        assert len(scheduler.jobs) == 2
        assert scheduler.timers == []

    def test_start_without_selection_arms_preview(self, setup):
        _, _, scheduler, orchestrator, _ = setup
        orchestrator.start()
        # panes load submitted; preview has nothing to show yet
        assert len(scheduler.jobs) == 1
        assert scheduler.delays() == [0.2]


class TestPanesCadence:
    """Test the collection cadence"""

    def test_completion_applies_and_rearms(self, setup):
        state, loader, scheduler, orchestrator, changes = setup
        orchestrator.start()
        scheduler.run_jobs()
        assert state.status_loaded
        assert state.selected_target == "s:1.0"
        assert changes
        assert 2.0 in scheduler.delays()

    def test_first_load_jumps_to_attention(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        loader.panes = [
            make_pane("s:1.0", path="/a"),
            make_pane("s:2.0", path="/a", status=STATUS_NEEDS_ATTENTION),
        ]
        state.apply_basic(loader.panes)
        orchestrator.start()
        scheduler.run_jobs()
        assert state.selected_target == "s:2.0"

    def test_error_is_recorded_and_rearms(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        loader.error = CollectionError("tmux list-panes failed")
        orchestrator.start()
        scheduler.run_jobs()
        assert isinstance(state.error, CollectionError)
        assert 2.0 in scheduler.delays()

    def test_unexpected_error_is_recorded_and_rearms(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        loader.error = ValueError("year 3170843 is out of range")
        orchestrator.start()
        scheduler.run_jobs()
        assert isinstance(state.error, CollectionError)
        assert "out of range" in str(state.error)
        assert orchestrator.panes.is_idle
        assert [d for d in scheduler.delays() if d == 2.0] == [2.0]

    def test_tick_while_in_flight_is_dropped(self, setup):
        _, loader, scheduler, orchestrator, _ = setup
        orchestrator.start()
        assert orchestrator.request_panes_refresh() is False
        assert loader.pane_calls == 0
        scheduler.run_jobs()
        assert loader.pane_calls == 1

    def test_manual_refresh_does_not_multiply_ticks(self, setup):
        _, loader, scheduler, orchestrator, _ = setup
        orchestrator.start()
        scheduler.run_jobs()
        stale_tick = [cb for delay, cb in scheduler.timers if delay == 2.0]

        assert orchestrator.request_panes_refresh() is True
        scheduler.run_jobs()
        # the refresh re-armed, so the earlier tick is now stale
        calls_before = loader.pane_calls
        for callback in stale_tick:
            callback()
        assert orchestrator.panes.is_idle
        assert loader.pane_calls == calls_before
        assert [d for d in scheduler.delays() if d == 2.0] == [2.0, 2.0]

    def test_at_most_one_live_tick(self, setup):
        _, loader, scheduler, orchestrator, _ = setup
        orchestrator.start()
        for _ in range(5):
            scheduler.run_jobs()
            orchestrator.request_panes_refresh()
            scheduler.run_jobs()
            scheduler.fire_timers()
        scheduler.run_jobs()
        live = [cb for delay, cb in scheduler.timers if delay == 2.0]
        before = loader.pane_calls
        for callback in live:
            callback()
        scheduler.run_jobs()
        assert loader.pane_calls - before <= 1


class TestPreviewCadence:
    """Test the preview cadence"""

    def test_preview_applied_and_rearmed(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        state.apply_basic(loader.panes)
        orchestrator.start()
        scheduler.run_jobs()
        assert state.preview_content == "content of s:1.0"
        assert 0.2 in scheduler.delays()

    def test_capture_error_shown_and_rearmed(self, setup):
        state, loader, scheduler, orchestrator, _ = setup

        def broken_preview(target):
            raise RuntimeError("server went away")

        orchestrator._load_preview = broken_preview
        state.apply_basic(loader.panes)
        orchestrator.start()
        scheduler.run_jobs()
        assert state.preview_content == "error: server went away"
        assert orchestrator.preview.is_idle
        assert 0.2 in scheduler.delays()

    def test_stale_preview_ignored(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        loader.panes = [make_pane("s:1.0", path="/a"), make_pane("s:2.0", path="/a")]
        state.apply_basic(loader.panes)
        orchestrator.start()
        # user moves before the capture lands
        state.move_next()
        preview_job = [j for j in scheduler.jobs if j[1] == orchestrator._on_scheduled_preview_loaded]
        job, on_done = preview_job[0]
        on_done(job())
        assert state.preview_target is None
        assert orchestrator.preview.is_idle

    def test_refresh_preview_on_cursor_move(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        loader.panes = [make_pane("s:1.0", path="/a"), make_pane("s:2.0", path="/a")]
        state.apply_basic(loader.panes)
        orchestrator.start()
        scheduler.run_jobs()
        preview_timers = len([d for d in scheduler.delays() if d == 0.2])

        state.move_next()
        orchestrator.refresh_preview()
        scheduler.run_jobs()
        assert state.preview_content == "content of s:2.0"
        # on-demand loads never arm another preview tick
        assert len([d for d in scheduler.delays() if d == 0.2]) == preview_timers

    def test_refresh_preview_noop_for_same_target(self, setup):
        state, loader, scheduler, orchestrator, _ = setup
        state.apply_basic(loader.panes)
        orchestrator.start()
        scheduler.run_jobs()
        scheduler.run_jobs()
        assert scheduler.jobs == []
        orchestrator.refresh_preview()
        assert scheduler.jobs == []


class TestStop:
    """Test shutdown"""

    def test_stop_halts_scheduling(self, setup):
        state, loader, scheduler, orchestrator, changes = setup
        state.apply_basic(loader.panes)
        orchestrator.start()
        orchestrator.stop()
        scheduler.run_jobs()
        assert orchestrator.stopped
        assert scheduler.timers == []
        assert changes == []
        assert orchestrator.request_panes_refresh() is False
