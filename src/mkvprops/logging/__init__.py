"""Structured logging module for mkvprops.

Provides configurable logging with JSON format support and file rotation.
"""

from mkvprops.logging.config import configure_logging
from mkvprops.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
