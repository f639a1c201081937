"""Container inspection using mkvmerge.

MkvmergeIntrospector validates that a path is a probe-able Matroska file
and reads its track list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mkvprops.core.subprocess_utils import CommandRunner, run_command_async
from mkvprops.exceptions import MediaIntrospectionError
from mkvprops.introspector.parsers import IdentifyResult, parse_identify_output

logger = logging.getLogger(__name__)

# Characters of probe output included in debug logs
_LOG_PREVIEW_CHARS = 100


class MkvmergeIntrospector:
    """Validates and identifies Matroska files with mkvmerge."""

    def __init__(
        self,
        tool_path: Path,
        runner: CommandRunner = run_command_async,
        extension: str = ".mkv",
        timeout: float | None = None,
    ) -> None:
        """Initialize the introspector.

        Args:
            tool_path: Path to mkvmerge.
            runner: Coroutine used to run commands.
            extension: Required file extension, compared case-insensitively.
            timeout: Timeout in seconds for each mkvmerge call.
        """
        self._tool_path = tool_path
        self._runner = runner
        self._extension = extension.casefold()
        self._timeout = timeout

    @property
    def tool_path(self) -> Path:
        return self._tool_path

    async def validate(self, path: Path) -> bool:
        """Check that a path is an existing, probe-able container.

        Checks run in order and stop at the first failure: the file exists,
        its extension matches, and ``mkvmerge --identify`` exits 0 with
        non-empty output.
        """
        if not path.is_file():
            logger.debug("File does not exist: %s", path)
            return False

        if path.suffix.casefold() != self._extension:
            logger.debug(
                "File does not have %s extension: %s", self._extension, path
            )
            return False

        try:
            result = await self._runner(
                [self._tool_path, "--identify", path], timeout=self._timeout
            )
        except Exception:
            logger.exception("Error validating MKV file: %s", path)
            return False

        is_valid = result.exit_code == 0 and bool(result.stdout)
        logger.debug(
            "MKV file validation for %s: exit_code=%d valid=%s output=%r error=%r",
            path,
            result.exit_code,
            is_valid,
            result.stdout[:_LOG_PREVIEW_CHARS],
            result.stderr[:_LOG_PREVIEW_CHARS],
        )
        return is_valid

    async def identify(self, path: Path) -> IdentifyResult:
        """Read the track list of a container.

        Raises:
            MediaIntrospectionError: If mkvmerge exits non-zero.
        """
        result = await self._runner(
            [self._tool_path, "-J", path], timeout=self._timeout
        )
        if result.exit_code != 0:
            raise MediaIntrospectionError(
                f"Failed to identify file: {result.stderr or result.stdout}"
            )
        identified = parse_identify_output(result.stdout, str(path))
        if identified.used_fallback:
            logger.warning(
                "Read %d tracks of %s from plain identify output; "
                "names, languages and flags are unknown",
                len(identified.tracks),
                path,
                extra={"file_path": str(path)},
            )
        return identified
