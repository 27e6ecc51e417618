"""
DocuMath - convert text with embedded LaTeX math into Word-ready documents

Turns the annotated text extracted from page images (prose interleaved with
$...$ and $$...$$ math) into a paragraph/run document tree whose equations are
written in Word's linear equation format.

Architecture:
- Extraction Context: Image/PDF sources and the multimodal model that reads them
- Segmenting Context: Splitting text into paragraphs, inline math and display math
- Transpiling Context: Rewriting LaTeX into the linear equation format
- Assembly Context: Building the paragraph/run tree handed to a document packager
"""

__version__ = "0.1.0"
