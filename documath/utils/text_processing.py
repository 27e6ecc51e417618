"""
Text processing utilities for delimiter-aware scanning.

Used by the transpiling rules to read LaTeX brace arguments that may contain
nested groups.
"""

from typing import List, Tuple


def extract_balanced_delimiters(
    text: str,
    start_pos: int,
    open_char: str = "{",
    close_char: str = "}",
    escape_char: str = "\\",
) -> Tuple[str, int]:
    """
    Extract content between balanced delimiters, handling escaped characters.

    Assumes start_pos is just AFTER an opening delimiter. Counts nested delimiters
    to find the matching closing delimiter, skipping escaped characters.

    Args:
        text: Text containing delimited content
        start_pos: Position just after the opening delimiter
        open_char: Opening delimiter character (default: '{')
        close_char: Closing delimiter character (default: '}')
        escape_char: Character used for escaping (default: '\\')

    Returns:
        (content, end_pos) where:
        - content: Text between the delimiters (excluding delimiters themselves)
        - end_pos: Position after the closing delimiter

    Raises:
        ValueError: If delimiters are unmatched

    Example:
        >>> text = "a^{b_{c}} + d"
        >>> extract_balanced_delimiters(text, 3)
        ('b_{c}', 9)
    """
    depth = 1
    pos = start_pos

    while pos < len(text) and depth > 0:
        char = text[pos]
        if char == escape_char:
            pos += 2
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
        pos += 1

    if depth != 0:
        raise ValueError(
            f"Unmatched {open_char}{close_char} delimiters starting at position {start_pos}"
        )

    return text[start_pos : pos - 1], pos


def extract_brace_arguments(text: str, start_pos: int, count: int) -> Tuple[List[str], int]:
    """
    Read `count` adjacent brace groups starting exactly at start_pos.

    Each group must open immediately where the previous one closed, the way
    \\frac{a}{b} is written.

    Args:
        text: LaTeX source
        start_pos: Position of the first opening brace
        count: Number of {...} groups to read

    Returns:
        (arguments, end_pos) with end_pos just after the last closing brace

    Raises:
        ValueError: If a group is missing or its braces never balance

    Example:
        >>> extract_brace_arguments(r"\\frac{x^{2}}{3}", 5, 2)
        (['x^{2}', '3'], 15)
    """
    arguments = []
    pos = start_pos

    for _ in range(count):
        if pos >= len(text) or text[pos] != "{":
            raise ValueError(f"Expected '{{' at position {pos}")
        content, pos = extract_balanced_delimiters(text, pos + 1)
        arguments.append(content)

    return arguments, pos
