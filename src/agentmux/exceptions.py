"""
Error types for agentmux.

CollectionError propagates to the UI as an error banner; ParseError never
leaves the parser that raised it; ActionError is shown as a notification.
"""


class AgentMuxError(Exception):
    """Base class for agentmux errors."""


class CollectionError(AgentMuxError):
    """Raised when pane enumeration fails."""


class ParseError(AgentMuxError):
    """Raised for a malformed row or record. Always caught by the caller."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class ActionError(AgentMuxError):
    """Raised when switching to or closing a pane fails."""

    def __init__(self, message: str, target: str = ""):
        super().__init__(message)
        self.target = target
