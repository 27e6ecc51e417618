"""
Extraction Context

Responsibilities:
- Loads image files and rasterizes PDF pages
- Renders the extraction prompt
- Calls a vision-capable model to read text and math from the images

Owns: Image sources, extraction prompt, model calls
Never: Interprets the math it extracts
"""

from documath.contexts.extraction.exceptions import ExtractionError, UnsupportedSourceError
from documath.contexts.extraction.extractor import (
    ExtractionResult,
    extract_content,
    extract_document,
)
from documath.contexts.extraction.image_sources import ImagePart, load_image_parts

__all__ = [
    "extract_content",
    "extract_document",
    "ExtractionResult",
    "ImagePart",
    "load_image_parts",
    "ExtractionError",
    "UnsupportedSourceError",
]
