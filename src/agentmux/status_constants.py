"""
Status constants and mappings for agentmux.

Centralizes pane status values and their display mappings.
"""

from typing import Tuple


# =============================================================================
# Pane Status Values
# =============================================================================

STATUS_IDLE = "idle"  # Agent is waiting at its prompt
STATUS_BUSY = "busy"  # Agent is working
STATUS_NEEDS_ATTENTION = "needs_attention"  # Agent is blocked on the user

# All valid pane status values, least urgent first
ALL_STATUSES = [
    STATUS_IDLE,
    STATUS_BUSY,
    STATUS_NEEDS_ATTENTION,
]


# =============================================================================
# Status to Symbol+Color (combined for display)
# =============================================================================

STATUS_SYMBOLS = {
    STATUS_IDLE: ("○", "white"),
    STATUS_BUSY: ("●", "#D97706"),
    STATUS_NEEDS_ATTENTION: ("●", "#9B9BF5"),
}


def get_status_symbol(status: str) -> Tuple[str, str]:
    """Get (symbol, color) tuple for a pane status."""
    return STATUS_SYMBOLS.get(status, ("?", "dim"))


STATUS_LABELS = {
    STATUS_IDLE: "idle",
    STATUS_BUSY: "busy",
    STATUS_NEEDS_ATTENTION: "attention",
}


def get_status_label(status: str) -> str:
    """Get the short label shown by `agentmux list`."""
    return STATUS_LABELS.get(status, status)


# =============================================================================
# Status Categorization
# =============================================================================


def is_user_blocked(status: str) -> bool:
    """Check if status indicates user intervention is required."""
    return status == STATUS_NEEDS_ATTENTION
