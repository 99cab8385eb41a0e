"""
Configuration for agentmux.

Settings live in ~/.agentmux/config.yaml (override the directory with
AGENTMUX_DIR). Every getter falls back to its default when the key is
missing or has the wrong type, so a broken config never stops the dashboard.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_PREVIEW_INTERVAL = 0.2
DEFAULT_CAPTURE_LINES = 10
DEFAULT_PREVIEW_LINES = 50


def get_agentmux_dir() -> Path:
    """Base directory for agentmux config and logs."""
    env_dir = os.environ.get("AGENTMUX_DIR")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".agentmux"


CONFIG_PATH = get_agentmux_dir() / "config.yaml"


def load_config() -> Dict[str, Any]:
    """Load the config file.

    Returns:
        The parsed mapping, or {} if the file is missing, unreadable,
        invalid YAML, or not a mapping at the top level.
    """
    if not CONFIG_PATH.exists():
        return {}
    try:
        with open(CONFIG_PATH) as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_config(config: Dict[str, Any]) -> None:
    """Write the config mapping to CONFIG_PATH."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_PATH, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)


def _positive_number(key: str, default: float, config: Optional[Dict[str, Any]] = None) -> float:
    value = (config if config is not None else load_config()).get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return value


def get_poll_interval(config: Optional[Dict[str, Any]] = None) -> float:
    """Seconds between full classification cycles."""
    return float(_positive_number("poll_interval", DEFAULT_POLL_INTERVAL, config))


def get_preview_interval(config: Optional[Dict[str, Any]] = None) -> float:
    """Seconds between preview refreshes."""
    return float(_positive_number("preview_interval", DEFAULT_PREVIEW_INTERVAL, config))


def get_capture_lines(config: Optional[Dict[str, Any]] = None) -> int:
    """Number of trailing pane lines inspected for status detection."""
    return int(_positive_number("capture_lines", DEFAULT_CAPTURE_LINES, config))


def get_preview_lines(config: Optional[Dict[str, Any]] = None) -> int:
    """Scroll-back lines shown in the preview pane."""
    return int(_positive_number("preview_lines", DEFAULT_PREVIEW_LINES, config))


def get_history_path(config: Optional[Dict[str, Any]] = None) -> Optional[Path]:
    """Path of the agent activity log.

    Returns None when no path is configured and the home directory cannot
    be determined.
    """
    value = (config if config is not None else load_config()).get("history_path")
    if isinstance(value, str) and value:
        return Path(value).expanduser()
    try:
        return Path.home() / ".claude" / "history.jsonl"
    except RuntimeError:
        return None


def get_attention_patterns(config: Optional[Dict[str, Any]] = None) -> List[str]:
    """Extra attention substrings appended to the built-in list."""
    value = (config if config is not None else load_config()).get("attention_patterns")
    if not isinstance(value, list):
        return []
    return [p for p in value if isinstance(p, str) and p]
