"""
Assembly Context

Responsibilities:
- Runs segmentation and transpiling for a whole document
- Produces the paragraph/run tree consumed by a document packager
- Guarantees a structurally valid (non-empty) paragraph list

Owns: DocumentTree records, conversion orchestration
Never: Writes the packaged container file
"""

from documath.contexts.assembly.converter import (
    ConversionResult,
    build_document,
    convert_file,
    convert_text,
    save_document,
)
from documath.contexts.assembly.document_tree import (
    Alignment,
    DocumentParagraph,
    DocumentRun,
    DocumentTree,
    RunKind,
)

__all__ = [
    # Orchestration
    "build_document",
    "convert_text",
    "convert_file",
    "save_document",
    "ConversionResult",
    # Data structures
    "DocumentTree",
    "DocumentParagraph",
    "DocumentRun",
    "RunKind",
    "Alignment",
]
