"""
Extraction context logger.

Provides logging interface for extraction context with automatic [extract] prefix.
All extraction modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from documath.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[extract]"


def setup_extraction_logger(log_dir: Path, provider_name: Optional[str] = None) -> Path:
    """
    Setup logger for extraction context.

    Args:
        log_dir: Directory for this extraction session
        provider_name: Provider recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="extract",
        log_dir=log_dir,
        provenance={"LLM provider": provider_name} if provider_name else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [extract] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [extract] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [extract] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [extract] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
