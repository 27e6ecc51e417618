"""
Integration test for the extraction → conversion pipeline.
Tests: image file → extracted text (fake model) → document tree.
"""

import pytest

from documath.contexts.assembly import Alignment, convert_text
from documath.contexts.extraction import extract_document
from documath.utils.config import load_settings
from documath.utils.llm import LLMResponse

EXTRACTED_TEXT = """Newton's second law states $F=ma$.
$$\\vec{F}=\\frac{d\\vec{p}}{dt}$$"""


class ScriptedProvider:
    name = "scripted/model"

    def __init__(self, content):
        self.content = content
        self.prompts = []

    def generate(self, prompt, images=()):
        self.prompts.append(prompt)
        return LLMResponse(content=self.content, model="model", input_tokens=0, output_tokens=0)


@pytest.mark.integration
def test_extracted_text_converts_to_document(tmp_path):
    """Test that model output flows through segmentation and transpiling."""
    source_path = tmp_path / "board.jpg"
    source_path.write_bytes(b"jpeg bytes")
    config_path = tmp_path / "settings.yaml"
    config_path.write_text("use_ocr: true\n")

    settings = load_settings(config_path)
    provider = ScriptedProvider(EXTRACTED_TEXT)
    result = extract_document(
        source_path, settings=settings, provider=provider, log_dir=tmp_path / "logs"
    )

    assert result.success, result.error
    assert "Optical Character Recognition" in provider.prompts[0]

    tree = convert_text(result.text)

    assert [p.alignment for p in tree.paragraphs] == [Alignment.LEFT, Alignment.CENTER]
    assert tree.equations() == ["F=ma", "\\vec(F)=(d\\vec(p))/(dt)"]
