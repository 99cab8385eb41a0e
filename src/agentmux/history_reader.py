"""
Read Claude Code's history file for per-project activity times.

Claude Code appends one JSON record per prompt to ~/.claude/history.jsonl:

    {"display": "fix the tests", "timestamp": 1700000000000,
     "project": "/Users/me/src/app", "sessionId": "..."}

Only `timestamp` (epoch milliseconds) and `project` are used here: the
dashboard shows how long ago each working directory last saw a prompt.
"""

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .exceptions import ParseError

logger = logging.getLogger(__name__)


def parse_history_record(line: str) -> Tuple[str, int]:
    """Parse one history line into (project, timestamp_ms).

    Raises:
        ParseError: for invalid JSON, a non-object record, a missing
            project, or a missing/zero/non-integer timestamp
    """
    try:
        data: Any = json.loads(line)
    except json.JSONDecodeError:
        raise ParseError("invalid JSON", line)
    if not isinstance(data, dict):
        raise ParseError("record is not an object", line)
    project = data.get("project")
    timestamp = data.get("timestamp")
    if not isinstance(project, str) or not project:
        raise ParseError("missing project", line)
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp == 0:
        raise ParseError("missing timestamp", line)
    return project, timestamp


def timestamp_to_datetime(timestamp_ms: Optional[int]) -> Optional[datetime]:
    """Convert a millisecond timestamp to a local datetime.

    Returns None for a missing timestamp or one outside the platform's
    representable range.
    """
    if not timestamp_ms:
        return None
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000)
    except (ValueError, OverflowError, OSError):
        return None


class HistoryFile:
    """Cached reader for the agent history log.

    The file is parsed at most once per modification time. Two calls with
    an unchanged mtime return the very same dict; a changed mtime triggers
    a full rescan whose result replaces the cache.

    Thread-safe: the collector reads history from a worker thread, so the
    stat, the rescan and the cache swap all happen under one lock.
    """

    def __init__(self, history_path: Optional[Path] = None):
        if history_path is None:
            from .config import get_history_path
            history_path = get_history_path()
        self._path = history_path
        self._lock = threading.Lock()
        self._cached_mtime: Optional[float] = None
        self._cached: Dict[str, int] = {}

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def last_active_by_project(self) -> Dict[str, int]:
        """Map each project path to its most recent timestamp (ms).

        Returns {} when the file does not exist or cannot be read; activity
        recency is cosmetic and never blocks loading.
        """
        if self._path is None:
            return {}

        with self._lock:
            try:
                mtime = self._path.stat().st_mtime
            except OSError:
                return {}

            if self._cached_mtime is not None and mtime == self._cached_mtime:
                return self._cached

            result: Dict[str, int] = {}
            try:
                with open(self._path, "r", encoding="utf-8", errors="replace") as f:
                    for line in f:
                        line = line.strip()
                        if not line:
                            continue
                        try:
                            project, timestamp = parse_history_record(line)
                        except ParseError:
                            continue
                        if project not in result or timestamp > result[project]:
                            result[project] = timestamp
            except OSError as e:
                logger.debug("Cannot read %s: %s", self._path, e)
                return {}

            self._cached = result
            self._cached_mtime = mtime
            logger.debug("Loaded activity for %d projects from %s", len(result), self._path)
            return result
