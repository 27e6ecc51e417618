"""
Unit tests for the extraction context.

Model calls use a fake provider; PDF rendering uses a stub pdfplumber
document so no renderer or API key is needed.
"""

import pytest

from documath.contexts.extraction import (
    ExtractionError,
    ImagePart,
    UnsupportedSourceError,
    extract_content,
    extract_document,
    load_image_parts,
)
from documath.contexts.extraction import image_sources
from documath.contexts.extraction.prompts import build_extraction_prompt, wants_enhanced_ocr
from documath.utils.config import ConversionSettings
from documath.utils.llm import LLMResponse


class FakeProvider:
    """Records requests and answers with canned text."""

    name = "fake/model"

    def __init__(self, content="Text with $x$.", error=None):
        self.content = content
        self.error = error
        self.requests = []

    def generate(self, prompt, images=()):
        self.requests.append((prompt, list(images)))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="model", input_tokens=10, output_tokens=5)


class FakePageImage:
    def __init__(self, number):
        self.number = number

    def save(self, buffer, format):
        buffer.write(f"{format}-{self.number}".encode())


class FakePage:
    def __init__(self, number):
        self.number = number
        self.resolutions = []

    def to_image(self, resolution):
        self.resolutions.append(resolution)
        return FakePageImage(self.number)


class FakePdf:
    def __init__(self, page_count):
        self.pages = [FakePage(n) for n in range(1, page_count + 1)]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


def image_part(rasterized=False):
    return ImagePart(mime_type="image/png", data=b"png", label="a.png", rasterized=rasterized)


class TestExtractionPrompt:
    """Tests for prompt rendering and OCR selection."""

    def test_standard_prompt(self):
        prompt = build_extraction_prompt()
        assert prompt.startswith("You are an expert at document analysis and conversion. Your task")
        assert "OCR" not in prompt
        assert "$...$" in prompt
        assert "$$...$$" in prompt
        assert prompt.endswith("Only output the extracted content.")

    def test_enhanced_ocr_prompt(self):
        prompt = build_extraction_prompt(enhanced_ocr=True)
        assert "Optical Character Recognition (OCR)" in prompt
        assert "- Apply your most powerful OCR techniques" in prompt
        assert "$$...$$" in prompt

    def test_no_blank_lines(self):
        """Template control lines leave no gaps in the rendered prompt."""
        for enhanced_ocr in (False, True):
            assert "\n\n" not in build_extraction_prompt(enhanced_ocr=enhanced_ocr)

    def test_enhanced_ocr_for_image_files(self):
        assert wants_enhanced_ocr([image_part()], use_ocr=True)

    def test_no_enhanced_ocr_for_pdf_pages(self):
        assert not wants_enhanced_ocr([image_part(rasterized=True)], use_ocr=True)

    def test_no_enhanced_ocr_unless_requested(self):
        assert not wants_enhanced_ocr([image_part()], use_ocr=False)
        assert not wants_enhanced_ocr([], use_ocr=True)


class TestLoadImageParts:
    """Tests for load_image_parts function."""

    def test_image_file(self, tmp_path):
        path = tmp_path / "scan.png"
        path.write_bytes(b"\x89PNG data")

        (part,) = load_image_parts(path)

        assert part.mime_type == "image/png"
        assert part.data == b"\x89PNG data"
        assert part.label == "scan.png"
        assert not part.rasterized
        assert part.as_input() == ("image/png", b"\x89PNG data")

    def test_suffix_case_ignored(self, tmp_path):
        path = tmp_path / "photo.JPG"
        path.write_bytes(b"jpeg")
        assert load_image_parts(path)[0].mime_type == "image/jpeg"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("x")
        with pytest.raises(UnsupportedSourceError, match="notes.txt"):
            load_image_parts(path)

    def test_missing_image_file(self, tmp_path):
        with pytest.raises(OSError):
            load_image_parts(tmp_path / "missing.png")

    def test_pdf_pages_rasterized(self, tmp_path, monkeypatch):
        fake_pdf = FakePdf(page_count=2)
        monkeypatch.setattr(image_sources.pdfplumber, "open", lambda path: fake_pdf)

        parts = load_image_parts(tmp_path / "paper.pdf", pdf_resolution=200)

        assert [part.label for part in parts] == ["page_1.png", "page_2.png"]
        assert [part.data for part in parts] == [b"PNG-1", b"PNG-2"]
        assert all(part.rasterized and part.mime_type == "image/png" for part in parts)
        assert fake_pdf.pages[0].resolutions == [200]


class TestExtractContent:
    """Tests for extract_content function."""

    def test_returns_model_text(self):
        provider = FakeProvider(content="Area $\\pi r^2$")
        assert extract_content([image_part()], provider=provider) == "Area $\\pi r^2$"

    def test_single_request_with_all_images(self):
        provider = FakeProvider()
        images = [image_part(), ImagePart("image/jpeg", b"jpg", "b.jpg")]

        extract_content(images, provider=provider)

        assert len(provider.requests) == 1
        prompt, sent = provider.requests[0]
        assert prompt == build_extraction_prompt()
        assert sent == [("image/png", b"png"), ("image/jpeg", b"jpg")]

    def test_enhanced_prompt_sent_for_ocr(self):
        provider = FakeProvider()
        extract_content([image_part()], provider=provider, use_ocr=True)
        assert provider.requests[0][0] == build_extraction_prompt(enhanced_ocr=True)

    def test_empty_response_becomes_empty_text(self):
        assert extract_content([image_part()], provider=FakeProvider(content=None)) == ""

    def test_no_images(self):
        with pytest.raises(ExtractionError, match="No images"):
            extract_content([], provider=FakeProvider())

    def test_provider_failure_wrapped(self):
        failure = RuntimeError("quota exceeded")
        with pytest.raises(ExtractionError) as exc_info:
            extract_content([image_part()], provider=FakeProvider(error=failure))

        assert exc_info.value.original_error is failure
        assert exc_info.value.provider_name == "fake/model"
        assert "quota exceeded" in str(exc_info.value)


class TestExtractDocument:
    """Tests for extract_document orchestration."""

    def test_success(self, tmp_path):
        path = tmp_path / "page.png"
        path.write_bytes(b"png")

        result = extract_document(path, provider=FakeProvider(), log_dir=tmp_path / "logs")

        assert result.success
        assert result.text == "Text with $x$."
        assert result.image_count == 1
        assert result.error is None
        assert (tmp_path / "logs" / "extract.log").exists()

    def test_unsupported_source_reported(self, tmp_path):
        path = tmp_path / "notes.docx"
        path.write_bytes(b"")

        result = extract_document(path, provider=FakeProvider(), log_dir=tmp_path / "logs")

        assert not result.success
        assert "Unsupported source file" in result.error

    def test_provider_failure_reported(self, tmp_path):
        path = tmp_path / "page.png"
        path.write_bytes(b"png")
        provider = FakeProvider(error=RuntimeError("boom"))

        result = extract_document(path, provider=provider, log_dir=tmp_path / "logs")

        assert not result.success
        assert result.image_count == 1
        assert "boom" in result.error

    def test_settings_control_ocr(self, tmp_path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"jpg")
        provider = FakeProvider()

        extract_document(
            path,
            settings=ConversionSettings(use_ocr=True),
            provider=provider,
            log_dir=tmp_path / "logs",
        )

        assert provider.requests[0][0] == build_extraction_prompt(enhanced_ocr=True)
