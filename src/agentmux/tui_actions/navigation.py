"""
Navigation action methods for TUI.

Moves the cursor between panes; workspace headers are skipped.
"""


class NavigationActionsMixin:
    """Mixin providing cursor movement for AgentMuxApp."""

    def action_next_pane(self) -> None:
        """Select the next pane in the list."""
        if self.state.move_next():
            self._cursor_moved()

    def action_prev_pane(self) -> None:
        """Select the previous pane in the list."""
        if self.state.move_prev():
            self._cursor_moved()

    def action_jump_to_attention(self) -> None:
        """Select the first pane waiting on the user."""
        if not self.state.jump_to_attention():
            self.notify("No panes need attention", severity="information")
            return
        self._cursor_moved()

    def _cursor_moved(self) -> None:
        self._refresh_pane_list()
        self.orchestrator.refresh_preview()
