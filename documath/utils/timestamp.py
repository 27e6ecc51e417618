"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Current local time as a sortable, filename-safe stamp (e.g. 20261019_101500)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
