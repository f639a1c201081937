"""Core utilities shared across mkvprops modules."""

from mkvprops.core.subprocess_utils import (
    UNSUPPORTED_EXIT_CODE,
    CommandRunner,
    ProcessResult,
    is_process_execution_supported,
    run_command_async,
)

__all__ = [
    "UNSUPPORTED_EXIT_CODE",
    "CommandRunner",
    "ProcessResult",
    "is_process_execution_supported",
    "run_command_async",
]
