"""
Unit tests for the pane collection pipeline.
"""

import json
from unittest.mock import MagicMock

import pytest

from agentmux.collector import PaneCollector
from agentmux.exceptions import CollectionError
from agentmux.history_reader import HistoryFile
from agentmux.mocks import MockSubprocess, MockTmux
from agentmux.process_table import PS_COMMAND
from agentmux.status_constants import STATUS_BUSY, STATUS_IDLE, STATUS_NEEDS_ATTENTION
from tests.fixtures import PANE_CONTENT_PERMISSION_PROMPT, ps_output


@pytest.fixture
def history(tmp_path):
    path = tmp_path / "history.jsonl"
    path.write_text(json.dumps({"project": "/src/app", "timestamp": 1700000000000}) + "\n")
    return HistoryFile(path)


@pytest.fixture
def processes():
    runner = MockSubprocess()
    runner.set_response(PS_COMMAND, stdout=ps_output([
        (100, 1, "zsh", "-zsh"),
        (200, 100, "claude", "claude"),
        (300, 200, "caffeinate", "caffeinate -i"),
        (500, 1, "zsh", "-zsh"),
        (600, 500, "node", "node /usr/local/bin/gemini"),
    ]))
    return runner


@pytest.fixture
def tmux():
    mock = MockTmux()
    mock.add_pane("main:1.0", command="claude", path="/src/app", pid=100, content="⏺ Working")
    mock.add_pane("main:2.0", command="vim", path="/src/app", pid=400)
    mock.add_pane("side:1.0", command="node", path="/src/web", pid=500,
                  content=PANE_CONTENT_PERMISSION_PROMPT)
    return mock


class TestPaneCollector:
    """Test collection and classification"""

    def test_list_panes_classifies(self, tmux, processes, history):
        collector = PaneCollector(tmux=tmux, processes=processes, history=history)
        panes = {p.target: p for p in collector.list_panes()}

        assert set(panes) == {"main:1.0", "side:1.0"}
        assert panes["main:1.0"].agent == "claude"
        assert panes["main:1.0"].status == STATUS_BUSY
        assert panes["side:1.0"].agent == "gemini"
        assert panes["side:1.0"].status == STATUS_NEEDS_ATTENTION

    def test_last_active_from_history(self, tmux, processes, history):
        collector = PaneCollector(tmux=tmux, processes=processes, history=history)
        panes = {p.target: p for p in collector.list_panes()}
        assert panes["main:1.0"].last_active.timestamp() == 1700000000
        assert panes["side:1.0"].last_active is None

    def test_basic_listing_skips_capture(self, tmux, processes, history):
        collector = PaneCollector(tmux=tmux, processes=processes, history=history)
        panes = collector.list_panes_basic()
        assert {p.status for p in panes} == {STATUS_IDLE}
        assert len(panes) == 2
        assert not [c for c in tmux.calls if c[0] == "capture_pane"]

    def test_one_capture_per_agent_pane(self, tmux, processes, history):
        collector = PaneCollector(tmux=tmux, processes=processes, history=history)
        collector.list_panes()
        captures = [c for c in tmux.calls if c[0] == "capture_pane"]
        assert sorted(captures) == [("capture_pane", "main:1.0"), ("capture_pane", "side:1.0")]

    def test_list_panes_failure_raises(self, tmux, processes, history):
        tmux.failing.add("list_panes")
        collector = PaneCollector(tmux=tmux, processes=processes, history=history)
        with pytest.raises(CollectionError):
            collector.list_panes()
        with pytest.raises(CollectionError):
            collector.list_panes_basic()

    def test_ps_failure_degrades(self, tmux, history):
        runner = MockSubprocess()
        runner.set_failure(PS_COMMAND)
        collector = PaneCollector(tmux=tmux, processes=runner, history=history)
        panes = collector.list_panes()
        # Without a process tree only direct commands resolve, and claude
        # cannot be seen as busy
        assert [(p.target, p.status) for p in panes] == [("main:1.0", STATUS_IDLE)]

    def test_missing_history_degrades(self, tmux, processes, tmp_path):
        collector = PaneCollector(tmux=tmux, processes=processes,
                                  history=HistoryFile(tmp_path / "missing.jsonl"))
        assert all(p.last_active is None for p in collector.list_panes())

    def test_out_of_range_history_degrades(self, tmux, processes, tmp_path):
        path = tmp_path / "history.jsonl"
        path.write_text(json.dumps({"project": "/src/app", "timestamp": 10**17}) + "\n")
        collector = PaneCollector(tmux=tmux, processes=processes, history=HistoryFile(path))
        assert all(p.last_active is None for p in collector.list_panes())
        assert all(p.last_active is None for p in collector.list_panes_basic())

    def test_ps_raising_degrades(self, tmux, history):
        runner = MagicMock()
        runner.run.side_effect = UnicodeDecodeError("utf-8", b"caf\xe9", 3, 4, "invalid continuation byte")
        collector = PaneCollector(tmux=tmux, processes=runner, history=history)
        assert [p.target for p in collector.list_panes()] == ["main:1.0"]

    def test_from_config(self, tmp_path):
        from agentmux import config

        config.save_config({
            "capture_lines": 3,
            "attention_patterns": ["hold on"],
            "history_path": str(tmp_path / "h.jsonl"),
        })
        collector = PaneCollector.from_config(tmux=MockTmux())
        assert collector.detector.capture_lines == 3
        assert "hold on" in collector.detector.patterns.attention_patterns
        assert collector.history.path == tmp_path / "h.jsonl"
