"""
Unit tests for document assembly.

Tests build_document() and convert_text() in documath.contexts.assembly and
the DocumentTree records they produce.
"""

from documath.contexts.assembly import (
    Alignment,
    DocumentParagraph,
    DocumentRun,
    DocumentTree,
    RunKind,
    build_document,
    convert_text,
)
from documath.contexts.segmenting import DisplayMath, MathRun, Paragraph, TextRun


class TestBuildDocument:
    """Tests for build_document function."""

    def test_empty_blocks_give_one_empty_paragraph(self):
        """A document with no content still has one paragraph."""
        tree = build_document([])
        assert tree.paragraphs == (DocumentParagraph(),)
        assert tree.paragraphs[0].alignment is Alignment.LEFT

    def test_display_math_is_centered_equation(self):
        tree = build_document([DisplayMath(r"\frac{1}{2}")])
        (paragraph,) = tree.paragraphs
        assert paragraph.alignment is Alignment.CENTER
        assert paragraph.runs == (DocumentRun(RunKind.EQUATION, "(1)/(2)"),)
        assert paragraph.is_display_equation

    def test_paragraph_runs_in_order(self):
        block = Paragraph((TextRun("Let "), MathRun("x_{i}"), TextRun(" be given.")))
        (paragraph,) = build_document([block]).paragraphs
        assert paragraph.alignment is Alignment.LEFT
        assert not paragraph.is_display_equation
        assert paragraph.runs == (
            DocumentRun(RunKind.TEXT, "Let "),
            DocumentRun(RunKind.EQUATION, "x_i"),
            DocumentRun(RunKind.TEXT, " be given."),
        )

    def test_transpiler_only_applied_to_math(self):
        """Text runs are never passed through the transpiler."""
        blocks = [Paragraph((TextRun("text"), MathRun("m"))), DisplayMath("d")]
        tree = build_document(blocks, transpiler=str.upper)
        assert tree.paragraphs[0].runs[0].content == "text"
        assert tree.equations() == ["M", "D"]


class TestConvertText:
    """Tests for convert_text function."""

    def test_empty_text(self):
        tree = convert_text("")
        assert len(tree.paragraphs) == 1
        assert tree.paragraphs[0].runs == ()

    def test_mixed_document(self):
        text = "Euler:\n$$e^{i\\pi}+1=0$$\nwhere $i^{2}=-1$."
        tree = convert_text(text)

        assert [p.alignment for p in tree.paragraphs] == [
            Alignment.LEFT,
            Alignment.CENTER,
            Alignment.LEFT,
        ]
        assert tree.equations() == ["e^(i\\pi)+1=0", "i^2=-1"]
        assert tree.equation_count == 2

    def test_paragraph_breaks_preserved(self):
        tree = convert_text("one\ntwo\n\nthree")
        texts = [p.runs[0].content for p in tree.paragraphs]
        assert texts == ["one", "two", "three"]


class TestDocumentTree:
    """Tests for DocumentTree serialization and counts."""

    def test_to_dict(self):
        tree = DocumentTree(
            (
                DocumentParagraph((DocumentRun(RunKind.TEXT, "a"),)),
                DocumentParagraph((DocumentRun(RunKind.EQUATION, "x"),), Alignment.CENTER),
            )
        )
        assert tree.to_dict() == {
            "paragraphs": [
                {"alignment": "left", "runs": [{"kind": "text", "content": "a"}]},
                {"alignment": "center", "runs": [{"kind": "equation", "content": "x"}]},
            ]
        }

    def test_equation_count_of_empty_tree(self):
        assert DocumentTree().equation_count == 0
