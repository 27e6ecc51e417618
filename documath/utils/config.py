"""
Conversion settings.

Settings come from three layers, later layers overriding earlier ones:
structured defaults below, an optional YAML file loaded with OmegaConf, and
explicit overrides (typically CLI flags).

The same module owns the one rule for writing document data through
OmegaConf: strings are escaped so they are never read as interpolations.

Example settings file:

    provider: gemini
    model: gemini-2.5-flash
    use_ocr: false
    pdf_resolution: 144
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()


@dataclass
class ConversionSettings:
    """Settings shared by the extraction and conversion commands."""

    provider: Optional[str] = os.getenv("LLM_PROVIDER")
    model: Optional[str] = os.getenv("LLM_MODEL")
    use_ocr: bool = False
    # pdf.js renders at scale 2.0 of 72 dpi
    pdf_resolution: int = 144
    logs_path: str = os.getenv("LOGS_PATH", "outs/logs")


def load_settings(
    config_path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None
) -> ConversionSettings:
    """
    Load conversion settings, merging a YAML file and overrides over the defaults.

    Keys that are not ConversionSettings fields are rejected by OmegaConf.
    Overrides whose value is None are ignored so that unset CLI flags do not
    mask values from the file.

    Args:
        config_path: Optional YAML settings file
        overrides: Optional mapping of field name to value

    Returns:
        ConversionSettings instance
    """
    schema = OmegaConf.structured(ConversionSettings)
    layers = [schema]

    if config_path is not None:
        layers.append(OmegaConf.load(config_path))

    if overrides:
        layers.append(
            OmegaConf.create({k: v for k, v in overrides.items() if v is not None})
        )

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)


# A run of backslashes (possibly empty) directly before an interpolation opener
_INTERPOLATION_OPENER = re.compile(r"(\\*)\$\{")


def escape_interpolations(value: Any) -> Any:
    """
    Escape OmegaConf interpolation syntax in every string of a nested structure.

    Document text is data, not config: "costs ${x today" must survive a YAML
    round trip unchanged. Each "${" becomes "\\${" and backslashes right before
    it are doubled, so resolving the loaded config yields the original text.

    Example:
        >>> escape_interpolations({"text": "a ${b} c"})
        {'text': 'a \\\\${b} c'}
    """
    if isinstance(value, str):
        return _INTERPOLATION_OPENER.sub(lambda m: m.group(1) * 2 + "\\${", value)
    if isinstance(value, dict):
        return {key: escape_interpolations(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [escape_interpolations(item) for item in value]
    return value


def create_literal_config(data: Dict[str, Any]) -> DictConfig:
    """OmegaConf.create() for data whose strings must be stored verbatim."""
    return OmegaConf.create(escape_interpolations(data))
