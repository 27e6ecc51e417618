"""
Document Tree

The paragraph/run records handed to a document packager. Every paragraph is
either a flow paragraph (left aligned, text and inline equations) or a
standalone equation (center aligned, one equation run). Equation runs carry
linear-format strings, already transpiled.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class RunKind(Enum):
    TEXT = "text"
    EQUATION = "equation"


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class DocumentRun:
    """Text run or equation run inside a document paragraph."""

    kind: RunKind
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "content": self.content}


@dataclass(frozen=True)
class DocumentParagraph:
    """One paragraph of the output document."""

    runs: Tuple[DocumentRun, ...] = field(default_factory=tuple)
    alignment: Alignment = Alignment.LEFT

    @property
    def is_display_equation(self) -> bool:
        return self.alignment is Alignment.CENTER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alignment": self.alignment.value,
            "runs": [run.to_dict() for run in self.runs],
        }


@dataclass(frozen=True)
class DocumentTree:
    """Ordered paragraphs of one converted document."""

    paragraphs: Tuple[DocumentParagraph, ...] = field(default_factory=tuple)

    @property
    def equation_count(self) -> int:
        return sum(
            1 for paragraph in self.paragraphs for run in paragraph.runs
            if run.kind is RunKind.EQUATION
        )

    def equations(self) -> List[str]:
        """All equation strings in document order."""
        return [
            run.content
            for paragraph in self.paragraphs
            for run in paragraph.runs
            if run.kind is RunKind.EQUATION
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {"paragraphs": [paragraph.to_dict() for paragraph in self.paragraphs]}
