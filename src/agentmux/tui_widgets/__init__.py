"""
TUI widget components for agentmux.
"""

from .error_banner import ErrorBanner
from .pane_list import PaneList
from .preview_pane import PreviewPane

__all__ = [
    "ErrorBanner",
    "PaneList",
    "PreviewPane",
]
