"""
Shared utilities for DocuMath.

Common functionality used across contexts:
- Logging setup
- Balanced delimiter scanning
- LLM providers
- Configuration management
"""

from documath.utils.config import ConversionSettings, load_settings
from documath.utils.text_processing import extract_balanced_delimiters

__all__ = ["ConversionSettings", "load_settings", "extract_balanced_delimiters"]
