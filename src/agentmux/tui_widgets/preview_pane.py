"""
Preview pane widget for TUI.

Shows the selected pane's captured output, ANSI colours included.
Uses ScrollableContainer for native mouse wheel / trackpad scrolling.
"""

from textual.containers import ScrollableContainer
from textual.widgets import Static
from rich.text import Text


class PreviewPane(ScrollableContainer, can_focus=False):
    """Live capture of the selected pane.

    Wraps a child Static whose height grows to fit all content lines.
    Auto-scrolls to bottom unless the user has scrolled up to review.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.pane_target: str = ""
        self.pane_output: str = ""
        self._auto_scroll = True

    def compose(self):
        yield Static(id="preview-content")

    def _build_content(self) -> Text:
        """Build the Rich Text renderable from the stored capture."""
        content = Text()
        pane_width = self.size.width if self.size.width > 0 else 80

        header = f"─── {self.pane_target} " if self.pane_target else "─── Preview "
        content.append(header, style="bold")
        content.append("─" * max(0, pane_width - len(header)), style="dim")
        content.append("\n")

        if not self.pane_output:
            content.append("(no output)", style="dim italic")
        else:
            content.append(Text.from_ansi(self.pane_output))
        return content

    def show(self, target: str, content: str) -> bool:
        """Replace the preview. Returns False if nothing changed."""
        if target == self.pane_target and content == self.pane_output:
            return False
        if target != self.pane_target:
            self._auto_scroll = True
        self.pane_target = target
        self.pane_output = content

        saved_scroll = self.scroll_offset.y
        was_auto = self._auto_scroll
        self.query_one("#preview-content", Static).update(self._build_content())

        if was_auto:
            self.call_after_refresh(lambda: self.scroll_end(animate=False))
        else:
            self.call_after_refresh(lambda: self.scroll_to(y=saved_scroll, animate=False))
        return True

    def on_mouse_scroll_up(self, event) -> None:
        """User scrolled up with mouse wheel: stop following output."""
        self._auto_scroll = False

    def on_mouse_scroll_down(self, event) -> None:
        self.call_after_refresh(self._check_at_bottom)

    def _check_at_bottom(self) -> None:
        """Re-enable auto-scroll if user has scrolled back to bottom."""
        if self.max_scroll_y <= 0 or self.scroll_offset.y >= self.max_scroll_y - 1:
            self._auto_scroll = True
