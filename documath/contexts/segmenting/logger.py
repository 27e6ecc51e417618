"""
Segmenting context logger.

Provides logging interface for segmenting context with automatic [segment] prefix.
Segmentation is pure and logs at DEBUG only.
"""

from loguru import logger

CONTEXT_PREFIX = "[segment]"


def _log_debug(message: str) -> None:
    """Log debug message with [segment] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
