"""Utility functions for LeadSync."""

from .formatting import format_file_size
from .log import configure_logging, get_logger

__all__ = [
    "format_file_size",
    "configure_logging",
    "get_logger",
]
