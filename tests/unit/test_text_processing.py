"""
Unit tests for delimiter-aware text scanning.

Tests documath.utils.text_processing.
"""

import pytest

from documath.utils.text_processing import extract_balanced_delimiters, extract_brace_arguments


class TestExtractBalancedDelimiters:
    """Tests for extract_balanced_delimiters function."""

    def test_simple_group(self):
        content, end = extract_balanced_delimiters("{abc} rest", 1)
        assert content == "abc"
        assert end == 5

    def test_nested_groups(self):
        """Inner braces are counted, not treated as the closing brace."""
        text = "a^{b_{c}} + d"
        assert extract_balanced_delimiters(text, 3) == ("b_{c}", 9)

    def test_escaped_brace_skipped(self):
        """An escaped closing brace does not end the group."""
        text = r"{\}x}"
        assert extract_balanced_delimiters(text, 1) == (r"\}x", 5)

    def test_commands_inside_group(self):
        text = r"{\alpha + \beta}"
        assert extract_balanced_delimiters(text, 1) == (r"\alpha + \beta", len(text))

    def test_custom_delimiters(self):
        assert extract_balanced_delimiters("[a[b]c]", 1, "[", "]") == ("a[b]c", 7)

    def test_unmatched_raises(self):
        with pytest.raises(ValueError, match="Unmatched"):
            extract_balanced_delimiters("{abc", 1)


class TestExtractBraceArguments:
    """Tests for extract_brace_arguments function."""

    def test_two_arguments(self):
        text = r"\frac{x^{2}}{3}"
        assert extract_brace_arguments(text, 5, 2) == (["x^{2}", "3"], 15)

    def test_single_argument_with_trailing_text(self):
        args, end = extract_brace_arguments(r"\sqrt{x}+1", 5, 1)
        assert args == ["x"]
        assert end == 8

    def test_missing_argument_raises(self):
        """A second group that does not start right away is an error."""
        with pytest.raises(ValueError):
            extract_brace_arguments(r"\frac{1} {2}", 5, 2)

    def test_argument_at_end_of_text_raises(self):
        with pytest.raises(ValueError):
            extract_brace_arguments(r"\frac{1}", 5, 2)

    def test_unbalanced_argument_raises(self):
        with pytest.raises(ValueError):
            extract_brace_arguments(r"\frac{1}{2", 5, 2)
