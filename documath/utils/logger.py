"""
Session logging for conversion and extraction runs.

Every run writes a full DEBUG log into its own session directory and echoes
INFO and above to the console. The log opens with a provenance header so a
log file on its own says what produced it.

Context-specific prefix wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from documath import __version__

load_dotenv()

CONSOLE_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors; file output is never colorized
LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}

HEADER_RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: Optional[Mapping[str, object]] = None,
    console_level: str = CONSOLE_LEVEL,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Existing sinks are removed, so the most recent session owns the output.

    Args:
        context_name: Log file stem (e.g., "convert", "extract")
        log_dir: Session directory, created if missing
        provenance: Extra header lines, e.g. {"LLM provider": "gemini"}
        console_level: Minimum console level (default: LOG_LEVEL env var or INFO)

    Returns:
        Path to the session log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(provenance)
    return log_file


def log_provenance(provenance: Optional[Mapping[str, object]] = None) -> None:
    """Write the session header: documath version, command line, cwd, Python, extras."""
    header = {
        "documath": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(provenance or {}),
    }

    logger.info(HEADER_RULE)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info(HEADER_RULE)
