"""
Unit test configuration for agentmux.

Keeps tests away from the user's ~/.agentmux and from any running tmux
server.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_agentmux_dir(tmp_path, monkeypatch):
    """Point config and logs at a temp directory for every test."""
    from agentmux import config

    agentmux_dir = tmp_path / "agentmux-home"
    monkeypatch.setenv("AGENTMUX_DIR", str(agentmux_dir))
    monkeypatch.setattr(config, "CONFIG_PATH", agentmux_dir / "config.yaml")
    monkeypatch.delenv("TMUX", raising=False)
    yield agentmux_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by setup_logging after each test."""
    yield
    logger = logging.getLogger("agentmux")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
