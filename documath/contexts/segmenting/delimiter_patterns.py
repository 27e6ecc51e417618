"""
Math Delimiter Constants

Delimiters recognised in extracted text, grouped in a frozen dataclass, plus
the scanner states used while walking a span.
"""

import re
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MathDelimiters:
    """
    Dollar-sign math delimiters.

    Display math is resolved over the whole text before inline math is looked
    for, so inline scanning never sees a matched $$ pair.
    """

    DISPLAY: str = "$$"
    INLINE: str = "$"


# Paragraph boundaries inside plain-text spans
LINE_BREAK = re.compile(r"\r?\n")


class ScanState(Enum):
    """Position of the scanner relative to a delimiter pair."""

    OUTSIDE = "outside"
    INSIDE = "inside"
