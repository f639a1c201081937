"""Execution layer for mkvprops.

- mkvpropedit: applies planned property changes
- outcome: exit-code classification and warning extraction
"""

from mkvprops.executor.mkvpropedit import MkvpropeditExecutor
from mkvprops.executor.outcome import (
    PARTIAL_SUCCESS_MESSAGE,
    extract_warnings,
    interpret_outcome,
)

__all__ = [
    "PARTIAL_SUCCESS_MESSAGE",
    "MkvpropeditExecutor",
    "extract_warnings",
    "interpret_outcome",
]
