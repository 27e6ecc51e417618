"""
Transpiling context logger.

Provides logging interface for transpiling context with automatic [transpile] prefix.
All transpiling modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[transpile]"


def _log_debug(message: str) -> None:
    """Log debug message with [transpile] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
