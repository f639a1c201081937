"""Interpretation of mkvpropedit exit codes and output.

mkvpropedit exits 0 on success, 1 when changes were applied but warnings
were issued, and 2 (or anything else) on error.
"""

from __future__ import annotations

from mkvprops.core.subprocess_utils import ProcessResult
from mkvprops.domain.models import EditResult

EXIT_SUCCESS = 0
EXIT_WARNINGS = 1

PARTIAL_SUCCESS_MESSAGE = "Operation completed with warnings"

_WARNING_PREFIX = "warning:"


def extract_warnings(output: str) -> list[str]:
    """Return the stripped lines of output that start with "Warning:".

    The prefix match is case-insensitive.
    """
    warnings: list[str] = []
    for line in output.splitlines():
        text = line.strip()
        if text.casefold().startswith(_WARNING_PREFIX):
            warnings.append(text)
    return warnings


def interpret_outcome(result: ProcessResult) -> EditResult:
    """Classify an mkvpropedit run.

    Warnings are extracted from stdout and stderr in every case; they never
    change the classification.
    """
    warnings = extract_warnings(result.combined_output)

    if result.exit_code == EXIT_SUCCESS:
        return EditResult(success=True, warnings=warnings, exit_code=result.exit_code)

    if result.exit_code == EXIT_WARNINGS:
        return EditResult(
            success=True,
            error_message=PARTIAL_SUCCESS_MESSAGE,
            warnings=warnings,
            exit_code=result.exit_code,
        )

    return EditResult(
        success=False,
        error_message=result.stderr,
        warnings=warnings,
        exit_code=result.exit_code,
    )
