"""
Session action methods for TUI.

Handles operations on the selected tmux pane: switching to it, closing it,
forcing a refresh and quitting. tmux calls run in worker threads; failures
surface as error notifications.
"""

import logging
import time

from textual import work

from ..exceptions import ActionError
from ..tmux_utils import kill_pane, switch_to_pane

logger = logging.getLogger(__name__)


class SessionActionsMixin:
    """Mixin providing pane actions for AgentMuxApp."""

    def _confirm_double_press(
        self,
        action_key: str,
        message: str,
        callback,
        target: str | None = None,
        timeout: float = 3.0,
    ) -> None:
        """Run callback only on the second press within timeout.

        First press shows a warning notification. If the target changes
        between presses, the confirmation resets.

        Args:
            action_key: Unique key for this action (e.g., "kill")
            message: Warning shown on first press
            callback: Callable to execute on confirmation
            target: Pane the action applies to
            timeout: Seconds before confirmation expires
        """
        now = time.time()
        pending = self._pending_confirmations.get(action_key)

        if pending is not None:
            pending_target, pending_time = pending
            if pending_target == target and (now - pending_time) < timeout:
                del self._pending_confirmations[action_key]
                callback()
                return
            # Different pane or expired: start over
            del self._pending_confirmations[action_key]

        self._pending_confirmations[action_key] = (target, now)
        self.notify(message, severity="warning", timeout=int(timeout))

    def _action_failed(self, error: ActionError) -> None:
        logger.warning("Action failed: %s", error)
        self.notify(str(error), severity="error")

    def action_switch_pane(self) -> None:
        """Switch the tmux client to the selected pane, then quit."""
        pane = self.state.selected_pane
        if pane is None:
            return
        self._switch_pane_async(pane.target)

    @work(thread=True, exclusive=True, group="pane_action")
    def _switch_pane_async(self, target: str) -> None:
        try:
            switch_to_pane(self.tmux, target)
        except ActionError as e:
            self.call_from_thread(self._action_failed, e)
            return
        self.call_from_thread(self.action_quit)

    def action_kill_pane(self) -> None:
        """Close the selected pane (press twice to confirm)."""
        pane = self.state.selected_pane
        if pane is None:
            return
        self._confirm_double_press(
            "kill",
            f"Press d again to close {pane.label} ({pane.agent})",
            lambda: self._kill_pane_async(pane.target),
            target=pane.target,
        )

    @work(thread=True, exclusive=True, group="pane_action")
    def _kill_pane_async(self, target: str) -> None:
        try:
            kill_pane(self.tmux, target)
        except ActionError as e:
            self.call_from_thread(self._action_failed, e)
            return
        self.call_from_thread(self._pane_killed, target)

    def _pane_killed(self, target: str) -> None:
        logger.info("Closed pane %s", target)
        self.notify(f"Closed {target}", severity="information")
        self.orchestrator.request_panes_refresh()

    def action_refresh(self) -> None:
        """Collect now instead of waiting for the next tick."""
        self.orchestrator.request_panes_refresh()

    def action_quit(self) -> None:
        """Stop polling and exit."""
        self.orchestrator.stop()
        self.exit()
