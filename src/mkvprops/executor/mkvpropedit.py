"""MKV property executor using mkvpropedit.

Applies a batch of property changes in a single in-place mkvpropedit run and
reports the outcome as an EditResult.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from mkvprops.core.subprocess_utils import CommandRunner, run_command_async
from mkvprops.domain.models import EditResult, PropertyChange
from mkvprops.executor.outcome import EXIT_SUCCESS, EXIT_WARNINGS, interpret_outcome
from mkvprops.planner.planner import ChangePlanner

logger = logging.getLogger(__name__)


class MkvpropeditExecutor:
    """Executor for property changes using mkvpropedit.

    Handles --set, --delete and --add directives on the info section and on
    tracks. Concurrent applies to the same file are not serialized here;
    mkvpropedit holds its own lock on the file.
    """

    def __init__(
        self,
        tool_path: Path,
        runner: CommandRunner = run_command_async,
        planner: ChangePlanner | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            tool_path: Path to mkvpropedit.
            runner: Coroutine used to run commands.
            planner: Planner used to build arguments.
            timeout: Subprocess timeout in seconds. None waits indefinitely.
        """
        self._tool_path = tool_path
        self._runner = runner
        self._planner = planner or ChangePlanner()
        self._timeout = timeout

    @property
    def tool_path(self) -> Path:
        return self._tool_path

    def build_command(
        self, file_path: Path, changes: list[PropertyChange]
    ) -> list[str]:
        """Build the full mkvpropedit command line."""
        return [str(self._tool_path), *self._planner.plan(file_path, changes)]

    async def apply(self, file_path: Path, changes: list[PropertyChange]) -> EditResult:
        """Apply changes to a file.

        Args:
            file_path: Container to edit.
            changes: Changes to apply.

        Returns:
            EditResult. Never raises: errors become a failed result.
        """
        if not changes:
            return EditResult(success=True)

        logger.info(
            "Applying %d changes to MKV file: %s",
            len(changes),
            file_path,
            extra={"file_path": str(file_path), "change_count": len(changes)},
        )

        start_time = time.monotonic()

        try:
            cmd = self.build_command(file_path, changes)
            logger.debug("mkvpropedit command: %s", " ".join(cmd))
            result = await self._runner(cmd, timeout=self._timeout)
        except Exception as e:
            elapsed = time.monotonic() - start_time
            logger.exception(
                "Error applying changes to %s",
                file_path,
                extra={
                    "file_path": str(file_path),
                    "elapsed_seconds": round(elapsed, 3),
                },
            )
            return EditResult(success=False, error_message=str(e))

        elapsed = time.monotonic() - start_time
        outcome = interpret_outcome(result)
        context = {
            "file_path": str(file_path),
            "returncode": result.exit_code,
            "warning_count": len(outcome.warnings),
            "elapsed_seconds": round(elapsed, 3),
        }

        if result.exit_code == EXIT_SUCCESS:
            logger.info("Successfully applied changes to MKV file", extra=context)
        elif result.exit_code == EXIT_WARNINGS:
            logger.warning(
                "Changes applied with warnings. Exit code: %d",
                result.exit_code,
                extra=context,
            )
        else:
            logger.error(
                "Failed to apply changes. Exit code: %d, Error: %s",
                result.exit_code,
                result.stderr,
                extra=context,
            )

        return outcome
