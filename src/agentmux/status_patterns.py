"""
Centralized status detection patterns.

Pattern lists are kept as data, separate from the matching code in
status_detector, so they can be extended from the config file and tested
on their own.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StatusPatterns:
    """All patterns used for status detection.

    Matching is case-sensitive substring search against the captured
    lines joined with newlines.
    """

    # Substrings meaning the agent is blocked on the user.
    attention_patterns: List[str] = field(default_factory=lambda: [
        # Tool permission prompts
        "Do you want to proceed?",
        "Do you want to allow",
        "Allow once",
        "press Enter to approve",
        # Question / selection prompts
        "Enter to select",
        "Type something",
        "Esc to cancel",
        # Waiting for a user response
        "I'll wait for your",
        "waiting for your response",
        "Let me know when",
        "Please let me know",
        "What would you like",
        "How would you like",
        "Should I proceed",
        "Would you like me to",
        "please provide",
        "please specify",
        "I need more information",
        "Could you clarify",
        "awaiting your",
        "ready when you are",
        "let me know if you'd like",
        "Feel free to ask",
        "Is there anything else",
        "What else can I help",
        "Want me to go ahead",
        "Shall I",
        "Do you want me to",
        "Ready to proceed",
    ])

    # Prompt glyphs; a line starting with one is the agent echoing user
    # input, not asking a question.
    prompt_chars: List[str] = field(default_factory=lambda: [
        "❯",  # Claude Code (U+276F)
        "›",  # Codex
        ">",  # Gemini
    ])


# Default patterns instance
DEFAULT_PATTERNS = StatusPatterns()


def get_patterns(extra_attention: Optional[List[str]] = None) -> StatusPatterns:
    """Get the status detection patterns.

    Args:
        extra_attention: Additional attention substrings (from config)

    Returns:
        DEFAULT_PATTERNS, or a copy extended with the extra substrings
    """
    if not extra_attention:
        return DEFAULT_PATTERNS
    patterns = StatusPatterns()
    patterns.attention_patterns.extend(extra_attention)
    return patterns


def matches_any(text: str, patterns: List[str]) -> bool:
    """Check if text contains any of the patterns."""
    return any(p in text for p in patterns)


def last_nonblank_line(lines: List[str]) -> Optional[str]:
    """Return the last line with visible content, stripped."""
    for line in reversed(lines):
        stripped = line.strip()
        if stripped:
            return stripped
    return None


def is_prompt_line(line: str, patterns: Optional[StatusPatterns] = None) -> bool:
    """Check if a (stripped) line starts with a prompt glyph."""
    if patterns is None:
        patterns = DEFAULT_PATTERNS
    return any(line.startswith(c) for c in patterns.prompt_chars)
