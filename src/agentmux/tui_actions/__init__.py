"""
TUI action mixins for agentmux.

Mixed into AgentMuxApp via multiple inheritance.
"""

from .navigation import NavigationActionsMixin
from .session import SessionActionsMixin

__all__ = [
    "NavigationActionsMixin",
    "SessionActionsMixin",
]
