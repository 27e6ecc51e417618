"""
Content Extractor

Sends page images to a vision-capable model and returns the annotated text
(prose with $...$ inline math and $$...$$ display math) that the segmenter
consumes.

This module exports:
- extract_content: images -> text
- extract_document: orchestration for a source file on disk, with logging
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from documath.contexts.extraction.exceptions import ExtractionError, UnsupportedSourceError
from documath.contexts.extraction.image_sources import ImagePart, load_image_parts
from documath.contexts.extraction.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_success,
    setup_extraction_logger,
)
from documath.contexts.extraction.prompts import build_extraction_prompt, wants_enhanced_ocr
from documath.utils.config import ConversionSettings
from documath.utils.llm import LLMProvider, get_provider
from documath.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


@dataclass
class ExtractionResult:
    """Result from extract_document() orchestration function."""

    success: bool
    source_path: Optional[Path] = None
    text: Optional[str] = None
    image_count: int = 0
    error: Optional[str] = None
    time_s: float = 0.0
    log_dir: Optional[Path] = None


def extract_content(
    images: Sequence[ImagePart],
    provider: Optional[LLMProvider] = None,
    use_ocr: bool = False,
) -> str:
    """
    Extract text and LaTeX math from images in a single model request.

    Args:
        images: Pages or photos, in reading order
        provider: LLM provider (default: get_provider() from environment)
        use_ocr: Ask for enhanced OCR; only honoured for image files

    Returns:
        Extracted text with $...$ and $$...$$ math

    Raises:
        ExtractionError: If there are no images or the provider call fails
    """
    if not images:
        raise ExtractionError("No images to extract content from")

    if provider is None:
        provider = get_provider()

    enhanced_ocr = wants_enhanced_ocr(images, use_ocr)
    prompt = build_extraction_prompt(enhanced_ocr=enhanced_ocr)
    _log_info(
        f"Extracting content from {len(images)} image(s) with {provider.name}"
        + (" (enhanced OCR)" if enhanced_ocr else "")
    )

    try:
        response = provider.generate(prompt, [image.as_input() for image in images])
    except Exception as e:
        raise ExtractionError(
            "Content extraction failed", provider_name=provider.name, original_error=e
        ) from e

    _log_debug(f"Tokens: {response.input_tokens} in, {response.output_tokens} out")
    return response.content or ""


def extract_document(
    source_path: Path,
    settings: Optional[ConversionSettings] = None,
    provider: Optional[LLMProvider] = None,
    log_dir: Optional[Path] = None,
) -> ExtractionResult:
    """
    Extract text from an image file or PDF.

    Errors from loading, provider setup and the model call are reported in
    the result, not raised.

    Args:
        source_path: Image file or PDF
        settings: Conversion settings (default: ConversionSettings())
        provider: LLM provider (default: built from settings.provider/model)
        log_dir: Directory for this session's log

    Returns:
        ExtractionResult with the extracted text on success
    """
    start_time = time.time()
    settings = settings or ConversionSettings()

    if log_dir is None:
        log_dir = Path(settings.logs_path) / f"extract_{now()}"
    setup_extraction_logger(log_dir, provider_name=settings.provider)
    _log_info(f"Starting to extract {source_path.name}")

    images = []
    try:
        images = load_image_parts(source_path, pdf_resolution=settings.pdf_resolution)
        if provider is None:
            provider = get_provider(settings.provider, settings.model)
        text = extract_content(images, provider=provider, use_ocr=settings.use_ocr)
    except (ExtractionError, UnsupportedSourceError, ImportError, ValueError, OSError) as e:
        elapsed = time.time() - start_time
        _log_error(f"Failed to extract {source_path.name} ({elapsed:.2f}s)")
        _log_error(f"  Error: {e}")
        return ExtractionResult(
            success=False,
            source_path=source_path,
            image_count=len(images),
            error=str(e),
            time_s=elapsed,
            log_dir=log_dir,
        )

    elapsed = time.time() - start_time
    _log_success(f"{source_path.name}: extracted {len(text)} characters ({elapsed:.2f}s)")
    return ExtractionResult(
        success=True,
        source_path=source_path,
        text=text,
        image_count=len(images),
        time_s=elapsed,
        log_dir=log_dir,
    )
