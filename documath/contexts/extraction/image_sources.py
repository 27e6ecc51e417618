"""
Image Sources

Loads the images sent to the extraction model. Image files are passed through
as-is; PDF pages are rasterized to PNG with pdfplumber.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import pdfplumber

from documath.contexts.extraction.exceptions import UnsupportedSourceError
from documath.contexts.extraction.logger import _log_debug

IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}
PDF_SUFFIX = ".pdf"

DEFAULT_PDF_RESOLUTION = 144


@dataclass(frozen=True)
class ImagePart:
    """One image for the extraction model."""

    mime_type: str
    data: bytes
    label: str
    # True when rendered from a PDF page rather than read from an image file
    rasterized: bool = False

    def as_input(self) -> Tuple[str, bytes]:
        """(mime_type, bytes) pair accepted by LLMProvider.generate()."""
        return self.mime_type, self.data


def rasterize_pdf(pdf_path: Path, resolution: int = DEFAULT_PDF_RESOLUTION) -> List[ImagePart]:
    """
    Render every page of a PDF to a PNG image part.

    Args:
        pdf_path: PDF file
        resolution: Render resolution in dpi

    Returns:
        One ImagePart per page, in page order
    """
    parts = []
    with pdfplumber.open(pdf_path) as pdf:
        for number, page in enumerate(pdf.pages, start=1):
            buffer = io.BytesIO()
            page.to_image(resolution=resolution).save(buffer, format="PNG")
            parts.append(
                ImagePart(
                    mime_type="image/png",
                    data=buffer.getvalue(),
                    label=f"page_{number}.png",
                    rasterized=True,
                )
            )
    _log_debug(f"Rasterized {len(parts)} pages from {pdf_path.name} at {resolution} dpi")
    return parts


def load_image_parts(
    source_path: Path, pdf_resolution: int = DEFAULT_PDF_RESOLUTION
) -> List[ImagePart]:
    """
    Load a source file as image parts.

    Args:
        source_path: Image file or PDF
        pdf_resolution: Render resolution for PDF pages

    Returns:
        List of ImagePart (one for an image file, one per page for a PDF)

    Raises:
        UnsupportedSourceError: If the suffix is not a known image type or .pdf
        OSError: If the file cannot be read
    """
    suffix = source_path.suffix.lower()

    if suffix == PDF_SUFFIX:
        return rasterize_pdf(source_path, resolution=pdf_resolution)

    mime_type = IMAGE_MIME_TYPES.get(suffix)
    if mime_type is None:
        raise UnsupportedSourceError(source_path, [*IMAGE_MIME_TYPES, PDF_SUFFIX])

    return [ImagePart(mime_type=mime_type, data=source_path.read_bytes(), label=source_path.name)]
