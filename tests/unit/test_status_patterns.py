"""
Unit tests for status detection patterns.
"""

from agentmux.status_patterns import (
    DEFAULT_PATTERNS,
    get_patterns,
    is_prompt_line,
    last_nonblank_line,
    matches_any,
)


class TestGetPatterns:
    """Test pattern configuration"""

    def test_default_instance(self):
        assert get_patterns() is DEFAULT_PATTERNS

    def test_extra_patterns_do_not_mutate_default(self):
        before = list(DEFAULT_PATTERNS.attention_patterns)
        patterns = get_patterns(["custom wait"])
        assert "custom wait" in patterns.attention_patterns
        assert DEFAULT_PATTERNS.attention_patterns == before


class TestHelpers:
    """Test matching helpers"""

    def test_matches_any_is_case_sensitive(self):
        assert matches_any("Do you want to proceed?", ["Do you want to proceed?"])
        assert not matches_any("do you want to proceed?", ["Do you want to proceed?"])

    def test_last_nonblank_line(self):
        assert last_nonblank_line(["a", "  b  ", "", "  "]) == "b"
        assert last_nonblank_line(["", " "]) is None

    def test_prompt_glyphs(self):
        assert is_prompt_line("❯ fix it?")
        assert is_prompt_line("› summarize?")
        assert is_prompt_line("> what now?")
        assert not is_prompt_line("What now?")
