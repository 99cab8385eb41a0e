"""
Pure formatting helpers for the TUI pane list.
"""

from datetime import datetime
from typing import Optional


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time compactly (s/m/h/d).

    Examples: 45s, 12m, 3h, 3h25m, 2d
    """
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        hours, minutes = seconds // 3600, (seconds % 3600) // 60
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h{minutes}m"
    return f"{seconds // 86400}d"


def format_ago(dt: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Elapsed time since `dt`, or "-" if unknown."""
    if dt is None:
        return "-"
    if now is None:
        now = datetime.now()
    return format_elapsed((now - dt).total_seconds())


def truncate(text: str, max_len: int) -> str:
    """Shorten text to max_len, ending in "..." when there is room for it."""
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[:max_len - 3] + "..."
