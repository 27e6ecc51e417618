"""Custom exceptions for the extraction context."""

from pathlib import Path
from typing import Iterable, Optional


class ExtractionError(Exception):
    """
    Exception raised when content extraction from images fails.

    Attributes:
        message: Error description
        provider_name: Provider that was called (e.g., 'gemini/gemini-2.5-flash')
        source_path: Image or PDF the images came from
        original_error: The provider or SDK error, if any
    """

    def __init__(
        self,
        message: str,
        provider_name: Optional[str] = None,
        source_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.provider_name = provider_name
        self.source_path = source_path
        self.original_error = original_error

        parts = [message]

        if provider_name:
            parts.append(f"\nProvider: {provider_name}")

        if source_path:
            parts.append(f"Source: {source_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class UnsupportedSourceError(ValueError):
    """Raised when a source file is neither a supported image nor a PDF."""

    def __init__(self, source_path: Path, supported_suffixes: Iterable[str]):
        self.source_path = source_path
        self.supported_suffixes = sorted(supported_suffixes)
        super().__init__(
            f"Unsupported source file: {source_path.name}. "
            f"Supported: {', '.join(self.supported_suffixes)}"
        )
