"""
Text -> Document Converter

Connects segmentation and transpiling and produces the paragraph/run tree a
document packager serializes.

This module exports:
- build_document: ContentBlocks -> DocumentTree
- convert_text: extracted text -> DocumentTree
- convert_file: orchestration for a text file on disk, with logging and YAML output
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from documath.contexts.assembly.document_tree import (
    Alignment,
    DocumentParagraph,
    DocumentRun,
    DocumentTree,
    RunKind,
)
from documath.contexts.assembly.logger import (
    _log_debug,
    log_conversion_result,
    log_conversion_start,
    setup_assembly_logger,
)
from documath.contexts.segmenting import ContentBlock, DisplayMath, Run, TextRun, segment
from documath.contexts.transpiling import transpile
from documath.utils.config import create_literal_config
from documath.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


@dataclass
class ConversionResult:
    """Result from convert_file() orchestration function."""

    success: bool
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None
    time_s: float = 0.0
    log_dir: Optional[Path] = None
    paragraph_count: int = 0
    equation_count: int = 0


def _convert_run(run: Run, transpiler: Callable[[str], str]) -> DocumentRun:
    if isinstance(run, TextRun):
        return DocumentRun(RunKind.TEXT, run.text)
    return DocumentRun(RunKind.EQUATION, transpiler(run.equation_source))


def build_document(
    blocks: Iterable[ContentBlock], transpiler: Callable[[str], str] = transpile
) -> DocumentTree:
    """
    Turn content blocks into document paragraphs.

    Display math becomes a center-aligned paragraph holding one equation run.
    Paragraph blocks become left-aligned paragraphs; their math runs are
    transpiled. A document with no blocks gets a single empty paragraph so
    the packaged file is still valid.

    Args:
        blocks: Output of segment()
        transpiler: Equation rewriter (defaults to transpile)

    Returns:
        DocumentTree in block order
    """
    paragraphs = []
    for block in blocks:
        if isinstance(block, DisplayMath):
            equation = DocumentRun(RunKind.EQUATION, transpiler(block.equation_source))
            paragraphs.append(DocumentParagraph((equation,), Alignment.CENTER))
        else:
            runs = tuple(_convert_run(run, transpiler) for run in block.runs)
            paragraphs.append(DocumentParagraph(runs))

    if not paragraphs:
        _log_debug("No content blocks; emitting one empty paragraph")
        paragraphs.append(DocumentParagraph())

    return DocumentTree(tuple(paragraphs))


def convert_text(text: str) -> DocumentTree:
    """
    Convert extracted text into a document tree.

    Example:
        >>> tree = convert_text(r"Area: $\\pi r^{2}$")
        >>> tree.equations()
        ['\\\\pi r^2']
    """
    return build_document(segment(text))


def save_document(tree: DocumentTree, output_path: Path) -> None:
    """Write the document tree as YAML."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(create_literal_config(tree.to_dict()), output_path)


def convert_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    log_dir: Optional[Path] = None,
) -> ConversionResult:
    """
    Convert a UTF-8 text file and save the document tree as YAML.

    File, encoding and YAML errors are reported in the result, not raised.

    Args:
        input_path: Text file produced by extraction
        output_path: YAML destination (default: input path with .yaml suffix)
        log_dir: Directory for this session's log (default: LOGS_PATH/convert_<timestamp>)

    Returns:
        ConversionResult with success status, paths, counts and timing
    """
    start_time = time.time()

    if log_dir is None:
        log_dir = LOGS_PATH / f"convert_{now()}"
    log_file = setup_assembly_logger(log_dir)
    log_conversion_start(input_path, log_file)

    if output_path is None:
        output_path = input_path.with_suffix(".yaml")

    try:
        text = input_path.read_text(encoding="utf-8")
        tree = convert_text(text)
        save_document(tree, output_path)
    except (OSError, UnicodeDecodeError, OmegaConfBaseException) as e:
        result = ConversionResult(
            success=False,
            input_path=input_path,
            error=str(e),
            time_s=time.time() - start_time,
            log_dir=log_dir,
        )
    else:
        result = ConversionResult(
            success=True,
            input_path=input_path,
            output_path=output_path,
            time_s=time.time() - start_time,
            log_dir=log_dir,
            paragraph_count=len(tree.paragraphs),
            equation_count=tree.equation_count,
        )

    log_conversion_result(input_path, result)
    return result
