"""
Pane status classification.

A pane is classified from fresh evidence on every poll, in priority order:

1. needs attention - a permission prompt, a question, or a "waiting for
   you" phrase is on screen
2. busy - the agent's own detector says it is working
3. idle - anything else

Attention wins over busy because an agent can print a spinner the instant
before it blocks on a question.
"""

from typing import List, Optional

from .detectors import Detector
from .models import RawPane
from .process_table import ProcessTree
from .protocols import TmuxInterface
from .status_constants import STATUS_BUSY, STATUS_IDLE, STATUS_NEEDS_ATTENTION
from .status_patterns import (
    StatusPatterns,
    get_patterns,
    is_prompt_line,
    last_nonblank_line,
    matches_any,
)
from .tmux_utils import capture_pane_lines


def needs_attention(lines: List[str], patterns: Optional[StatusPatterns] = None) -> bool:
    """Check if captured pane lines show the agent waiting on the user.

    True if any attention pattern appears in the text, or if the last
    non-blank line ends with "?" and is not a prompt echo. The "?" rule
    also fires on rhetorical questions in agent output; that false positive
    is accepted.
    """
    if patterns is None:
        patterns = get_patterns()

    if matches_any("\n".join(lines), patterns.attention_patterns):
        return True

    last = last_nonblank_line(lines)
    return bool(last) and last.endswith("?") and not is_prompt_line(last, patterns)


def classify_status(
    lines: List[str],
    detector: Optional[Detector],
    pid: int,
    tree: ProcessTree,
    patterns: Optional[StatusPatterns] = None,
) -> str:
    """Classify a pane from its captured lines. Always returns a status."""
    if needs_attention(lines, patterns):
        return STATUS_NEEDS_ATTENTION
    if detector is not None and detector.is_busy(lines, pid, tree):
        return STATUS_BUSY
    return STATUS_IDLE


class StatusDetector:
    """Captures a pane once and classifies it."""

    def __init__(
        self,
        tmux: TmuxInterface,
        patterns: Optional[StatusPatterns] = None,
        capture_lines: int = 10,
    ):
        self.tmux = tmux
        self.patterns = patterns or get_patterns()
        self.capture_lines = capture_lines

    def detect_status(self, raw: RawPane, detector: Optional[Detector], tree: ProcessTree) -> str:
        """Detect the status of one pane.

        The capture is shared by the attention and busy checks so each pane
        costs a single capture-pane call.
        """
        lines = capture_pane_lines(self.tmux, raw.target, self.capture_lines)
        return classify_status(lines, detector, raw.pid, tree, self.patterns)
