"""
Segmenting Context

Responsibilities:
- Splits extracted text into paragraphs and display-math blocks
- Splits paragraphs into text runs and inline-math runs
- Preserves source order and paragraph breaks

Owns: ContentBlock / Run data model, delimiter scanning
Never: Rewrites equation sources
"""

from documath.contexts.segmenting.content_blocks import (
    ContentBlock,
    DisplayMath,
    MathRun,
    Paragraph,
    Run,
    TextRun,
    blocks_to_dicts,
    literal_content,
)
from documath.contexts.segmenting.segmenter import scan_delimited, segment

__all__ = [
    # Segmentation
    "segment",
    "scan_delimited",
    # Data structures
    "ContentBlock",
    "DisplayMath",
    "Paragraph",
    "Run",
    "TextRun",
    "MathRun",
    # Helpers
    "literal_content",
    "blocks_to_dicts",
]
