"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    60-69: Warning states
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for mkvprops CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_INVALID = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40

    # Warning states (60-69)
    WARNINGS = 60
