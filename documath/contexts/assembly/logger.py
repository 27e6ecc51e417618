"""
Assembly context logger.

Provides logging interface for assembly context with automatic [assemble] prefix.
All assembly modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from documath.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[assemble]"


def setup_assembly_logger(log_dir: Path) -> Path:
    """
    Setup logger for assembly context.

    Args:
        log_dir: Directory for this conversion session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="convert", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [assemble] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [assemble] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [assemble] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [assemble] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_conversion_start(input_path: Path, log_file: Path) -> None:
    """Log start of a file conversion."""
    _log_info(f"Starting to convert {input_path.name}")
    _log_info(f"Log file: {log_file}")
    _log_debug(f"Source: {input_path}")


def log_conversion_result(input_path: Path, result) -> None:
    """
    Log conversion outcome.

    Args:
        input_path: File that was converted
        result: ConversionResult from convert_file()
    """
    if result.success:
        _log_success(
            f"{input_path.name}: converted {result.paragraph_count} paragraphs, "
            f"{result.equation_count} equations ({result.time_s:.2f}s)"
        )
        if result.output_path:
            _log_info(f"  Output: {result.output_path}")
    else:
        _log_error(f"Failed to convert {input_path.name} ({result.time_s:.2f}s)")
        _log_error(f"  Error: {result.error}")
