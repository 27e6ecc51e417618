"""
Extraction prompt rendering.

The prompt lives in template/extraction_prompt.txt.jinja. The enhanced OCR
wording is only used for photographed or scanned image files, never for
rendered PDF pages.
"""

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from documath.contexts.extraction.image_sources import ImagePart

TEMPLATE_PATH = Path(__file__).parent / "template"
PROMPT_TEMPLATE = "extraction_prompt.txt.jinja"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_PATH)),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def wants_enhanced_ocr(images: Sequence[ImagePart], use_ocr: bool) -> bool:
    """Enhanced OCR applies when requested and every image came from an image file."""
    return use_ocr and bool(images) and not any(image.rasterized for image in images)


def build_extraction_prompt(enhanced_ocr: bool = False) -> str:
    """Render the extraction prompt."""
    return _env.get_template(PROMPT_TEMPLATE).render(enhanced_ocr=enhanced_ocr).strip()
