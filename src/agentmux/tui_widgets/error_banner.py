"""
Error banner widget for TUI.

Shows the last collection failure above the pane list. Hidden while the
latest cycle succeeded.
"""

from typing import Optional

from textual.widgets import Static
from rich.text import Text


class ErrorBanner(Static):
    """One-line banner for the current collection error"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.error_text: Optional[str] = None

    def set_error(self, error: Optional[Exception]) -> None:
        self.error_text = str(error) if error is not None else None
        self.display = self.error_text is not None
        self.refresh()

    def render(self) -> Text:
        content = Text()
        if self.error_text:
            content.append(" Error: ", style="bold white on red")
            content.append(f" {self.error_text}", style="red")
        return content
