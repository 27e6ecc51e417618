"""
Content block data structures.

The segmenter turns raw extracted text into an ordered sequence of blocks:

    ContentBlock = Paragraph | DisplayMath
    Run          = TextRun | MathRun

A Paragraph owns its runs; display math is always its own block and never
appears inside a Paragraph. All structures are frozen and created fresh for
every conversion.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple, Union


@dataclass(frozen=True)
class TextRun:
    """Literal prose inside a paragraph. Whitespace is significant and kept verbatim."""

    text: str


@dataclass(frozen=True)
class MathRun:
    """Inline equation inside a paragraph (delimiters stripped, source trimmed)."""

    equation_source: str


Run = Union[TextRun, MathRun]


@dataclass(frozen=True)
class Paragraph:
    """A paragraph of text and inline-math runs, in source order."""

    runs: Tuple[Run, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DisplayMath:
    """A standalone equation rendered as its own center-aligned block."""

    equation_source: str


ContentBlock = Union[Paragraph, DisplayMath]


def literal_content(blocks: Iterable[ContentBlock]) -> str:
    """
    Concatenate the literal content of blocks in order.

    Text runs contribute their text, math contributes its delimiter-stripped
    source. Useful for checking that segmentation lost no material.

    Example:
        >>> literal_content([Paragraph((TextRun("a "), MathRun("x")))])
        'a x'
    """
    pieces: List[str] = []
    for block in blocks:
        if isinstance(block, DisplayMath):
            pieces.append(block.equation_source)
            continue
        for run in block.runs:
            pieces.append(run.text if isinstance(run, TextRun) else run.equation_source)
    return "".join(pieces)


def blocks_to_dicts(blocks: Iterable[ContentBlock]) -> List[Dict[str, Any]]:
    """Convert blocks to plain dicts (for YAML/JSON output)."""
    result = []
    for block in blocks:
        if isinstance(block, DisplayMath):
            result.append({"type": "display_math", "source": block.equation_source})
            continue
        runs = []
        for run in block.runs:
            if isinstance(run, TextRun):
                runs.append({"type": "text", "text": run.text})
            else:
                runs.append({"type": "math", "source": run.equation_source})
        result.append({"type": "paragraph", "runs": runs})
    return result
