"""
Text Segmenter

Splits extracted text into paragraphs, inline math and display math.

Segmentation runs in two levels, each driven by the same span scanner:

1. The whole text is scanned for $$...$$ pairs. Display math may span lines.
2. Every remaining text span is split into lines, and each line is scanned
   for $...$ pairs. Inline math therefore never crosses a paragraph boundary.

A delimiter with no closing partner is ordinary text. Literal dollar signs in
prose cannot be escaped and will be read as delimiters.
"""

from dataclasses import dataclass
from typing import List

from documath.contexts.segmenting.content_blocks import (
    ContentBlock,
    DisplayMath,
    MathRun,
    Paragraph,
    Run,
    TextRun,
)
from documath.contexts.segmenting.delimiter_patterns import LINE_BREAK, MathDelimiters, ScanState
from documath.contexts.segmenting.logger import _log_debug


@dataclass(frozen=True)
class Span:
    """A stretch of source text, either between or inside a delimiter pair."""

    content: str
    is_math: bool


def scan_delimited(text: str, delimiter: str) -> List[Span]:
    """
    Walk text and cut it into spans at delimiter pairs.

    An opening delimiter only switches the scanner INSIDE when a closing
    delimiter exists further on; otherwise the rest of the text is one plain
    span. Each pair closes at the nearest following delimiter. Empty plain
    spans are not emitted; empty math spans are (callers decide to drop them).

    Args:
        text: Text to scan
        delimiter: Delimiter string, e.g. "$$" or "$"

    Returns:
        Spans in source order

    Example:
        >>> scan_delimited("a $x$ b", "$")
        [Span(content='a ', is_math=False), Span(content='x', is_math=True), Span(content=' b', is_math=False)]
    """
    spans: List[Span] = []
    width = len(delimiter)
    state = ScanState.OUTSIDE
    cursor = 0

    while cursor < len(text):
        hit = text.find(delimiter, cursor)
        if hit == -1:
            break

        if state is ScanState.OUTSIDE:
            if text.find(delimiter, hit + width) == -1:
                break
            if hit > cursor:
                spans.append(Span(text[cursor:hit], is_math=False))
            state = ScanState.INSIDE
        else:
            spans.append(Span(text[cursor:hit], is_math=True))
            state = ScanState.OUTSIDE

        cursor = hit + width

    if cursor < len(text):
        spans.append(Span(text[cursor:], is_math=False))

    return spans


def split_lines(text: str) -> List[str]:
    """Split a plain-text span into candidate paragraphs at line breaks."""
    return LINE_BREAK.split(text)


def segment_line(line: str) -> List[Run]:
    """
    Split one line into text and inline-math runs.

    Math sources are trimmed and dropped when empty; text is kept verbatim.
    """
    runs: List[Run] = []
    for span in scan_delimited(line, MathDelimiters.INLINE):
        if not span.is_math:
            runs.append(TextRun(span.content))
            continue
        source = span.content.strip()
        if source:
            runs.append(MathRun(source))
        else:
            _log_debug("Dropped empty inline math span")
    return runs


def segment(text: str) -> List[ContentBlock]:
    """
    Split text into an ordered sequence of content blocks.

    Blank lines are dropped once any block has been emitted. A blank first
    line that still carries whitespace becomes a whitespace-only paragraph;
    this mirrors the long-standing output of the converter.

    Args:
        text: Extracted text with $...$ and $$...$$ math

    Returns:
        List of Paragraph and DisplayMath blocks in source order

    Example:
        >>> segment("Hello $x^2$ world")
        [Paragraph(runs=(TextRun(text='Hello '), MathRun(equation_source='x^2'), TextRun(text=' world')))]
    """
    blocks: List[ContentBlock] = []

    for span in scan_delimited(text, MathDelimiters.DISPLAY):
        if span.is_math:
            source = span.content.strip()
            if source:
                blocks.append(DisplayMath(source))
            else:
                _log_debug("Dropped empty display math span")
            continue

        for line in split_lines(span.content):
            if not line.strip() and blocks:
                continue
            runs = segment_line(line)
            if runs:
                blocks.append(Paragraph(tuple(runs)))

    _log_debug(f"Segmented {len(text)} characters into {len(blocks)} blocks")
    return blocks
