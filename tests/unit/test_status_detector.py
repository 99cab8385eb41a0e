"""
Unit tests for pane status classification.
"""

import pytest

from agentmux.detectors import CLAUDE, build_default_registry
from agentmux.mocks import MockTmux
from agentmux.process_table import ProcessNode, ProcessTree
from agentmux.status_constants import ALL_STATUSES, STATUS_BUSY, STATUS_IDLE, STATUS_NEEDS_ATTENTION
from agentmux.status_detector import StatusDetector, classify_status, needs_attention
from agentmux.status_patterns import get_patterns
from tests.fixtures import (
    PANE_CONTENT_CODEX_BUSY,
    PANE_CONTENT_GEMINI_BUSY,
    PANE_CONTENT_IDLE,
    PANE_CONTENT_PERMISSION_PROMPT,
    PANE_CONTENT_PROMPT_ECHO,
    PANE_CONTENT_QUESTION,
    make_raw_pane,
)

CAFFEINATED = ProcessTree.from_nodes([
    ProcessNode(200, 100, "claude"),
    ProcessNode(300, 200, "caffeinate"),
])


class TestNeedsAttention:
    """Test the attention heuristics"""

    def test_permission_prompt(self):
        assert needs_attention(PANE_CONTENT_PERMISSION_PROMPT.splitlines())

    def test_trailing_question(self):
        assert needs_attention(PANE_CONTENT_QUESTION.splitlines())

    def test_prompt_echo_is_not_a_question(self):
        assert not needs_attention(PANE_CONTENT_PROMPT_ECHO.splitlines())

    def test_idle_prompt(self):
        assert not needs_attention(PANE_CONTENT_IDLE.splitlines())

    def test_question_not_on_last_line(self):
        lines = ["Shall we?", "ok, doing it now"]
        # "Shall we?" does not contain "Shall I"
        assert not needs_attention(lines)

    def test_blank_trailing_lines_ignored(self):
        assert needs_attention(["Which file?", "", "   "])

    def test_empty_capture(self):
        assert not needs_attention([])

    def test_extra_patterns_from_config(self):
        lines = ["Press enter to continue"]
        assert not needs_attention(lines)
        assert needs_attention(lines, get_patterns(["Press enter to continue"]))


class TestClassifyStatus:
    """Test classification priority"""

    def test_attention_beats_busy(self):
        lines = ["Do you want to proceed? (y/n)"]
        assert classify_status(lines, CLAUDE, 100, CAFFEINATED) == STATUS_NEEDS_ATTENTION

    def test_claude_busy_from_process_tree(self):
        assert classify_status(["⏺ Reading files"], CLAUDE, 100, CAFFEINATED) == STATUS_BUSY

    def test_claude_idle_without_caffeinate(self):
        assert classify_status(PANE_CONTENT_IDLE.splitlines(), CLAUDE, 100, ProcessTree.empty()) == STATUS_IDLE

    def test_output_hint_busy(self):
        registry = build_default_registry()
        empty = ProcessTree.empty()
        assert classify_status(PANE_CONTENT_GEMINI_BUSY.splitlines(), registry.get("gemini"), 1, empty) == STATUS_BUSY
        assert classify_status(PANE_CONTENT_CODEX_BUSY.splitlines(), registry.get("codex"), 1, empty) == STATUS_BUSY

    def test_no_detector_is_idle(self):
        assert classify_status(["hello"], None, 1, ProcessTree.empty()) == STATUS_IDLE

    @pytest.mark.parametrize("lines", [
        [],
        [""],
        ["?"],
        ["❯ ?"],
        ["\x1b[31m?"],
        ["a" * 5000],
    ])
    def test_always_returns_a_status(self, lines):
        assert classify_status(lines, CLAUDE, 0, ProcessTree.empty()) in ALL_STATUSES


class TestStatusDetector:
    """Test capture + classify"""

    def test_captures_once_per_pane(self):
        tmux = MockTmux()
        tmux.add_pane("main:1.0", content=PANE_CONTENT_PERMISSION_PROMPT)
        detector = StatusDetector(tmux)
        status = detector.detect_status(make_raw_pane("main:1.0", pid=100), CLAUDE, CAFFEINATED)
        assert status == STATUS_NEEDS_ATTENTION
        assert tmux.calls == [("capture_pane", "main:1.0")]

    def test_only_last_lines_inspected(self):
        tmux = MockTmux()
        content = "Which one?\n" + "\n".join(f"output {i}" for i in range(20))
        tmux.add_pane("main:1.0", content=content)
        detector = StatusDetector(tmux, capture_lines=10)
        assert detector.detect_status(make_raw_pane("main:1.0"), CLAUDE, ProcessTree.empty()) == STATUS_IDLE

    def test_failed_capture_is_idle(self):
        detector = StatusDetector(MockTmux())
        assert detector.detect_status(make_raw_pane("gone:1.0"), CLAUDE, ProcessTree.empty()) == STATUS_IDLE
