"""Service facade over the mkvprops pipeline.

MkvService is the request/response boundary used by the CLI, the HTTP API,
and any other front end. Each operation reports failures through its result
value (an empty list, False, an invalid FileInfo or a failed EditResult), so
no exception escapes an operation. A missing mkvtoolnix installation is the
one error raised, at construction.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mkvprops.catalog import PropertyCatalog, boolean_flag_properties
from mkvprops.config.models import MkvPropsConfig
from mkvprops.core.subprocess_utils import CommandRunner, run_command_async
from mkvprops.domain.models import (
    EditResult,
    FileInfo,
    PropertyChange,
    PropertyDefinition,
)
from mkvprops.exceptions import MediaIntrospectionError
from mkvprops.executor import MkvpropeditExecutor
from mkvprops.introspector import MkvmergeIntrospector
from mkvprops.planner import ChangePlanner, build_flag_changes
from mkvprops.tools import resolve_mkvtoolnix

logger = logging.getLogger(__name__)

INVALID_FILE_MESSAGE = "File is not a valid MKV file"

# Current value given to every boolean property when a file is read. It is a
# fixed baseline, not the file's per-track state.
BOOLEAN_BASELINE_VALUE = "0"


class MkvService:
    """Reads and edits Matroska properties via mkvpropedit and mkvmerge."""

    def __init__(
        self,
        mkvpropedit_path: Path,
        mkvmerge_path: Path,
        runner: CommandRunner = run_command_async,
        extension: str = ".mkv",
        timeout: float | None = None,
    ) -> None:
        """Initialize the service with resolved tool paths.

        Args:
            mkvpropedit_path: Path to mkvpropedit.
            mkvmerge_path: Path to mkvmerge.
            runner: Coroutine used to run commands.
            extension: Required container extension.
            timeout: Timeout in seconds for each tool invocation.
        """
        self.mkvpropedit_path = mkvpropedit_path
        self.mkvmerge_path = mkvmerge_path
        self.catalog = PropertyCatalog(mkvpropedit_path, runner, timeout=timeout)
        self.introspector = MkvmergeIntrospector(
            mkvmerge_path, runner, extension=extension, timeout=timeout
        )
        self.executor = MkvpropeditExecutor(
            mkvpropedit_path, runner, planner=ChangePlanner(), timeout=timeout
        )
        logger.info("MkvService initialized with mkvpropedit at: %s", mkvpropedit_path)

    @classmethod
    def create(
        cls,
        config: MkvPropsConfig,
        runner: CommandRunner = run_command_async,
    ) -> MkvService:
        """Build a service from configuration, resolving the tools.

        Raises:
            ToolNotAvailableError: If mkvpropedit or mkvmerge is missing.
        """
        mkvpropedit, mkvmerge = resolve_mkvtoolnix(
            config.tools.mkvpropedit, config.tools.mkvmerge
        )
        return cls(
            mkvpropedit,
            mkvmerge,
            runner=runner,
            extension=config.container.extension,
            timeout=config.process.timeout_seconds or None,
        )

    async def get_available_properties(self) -> list[PropertyDefinition]:
        """List every property the installed mkvpropedit can edit."""
        try:
            return await self.catalog.list()
        except Exception:
            logger.exception("Error getting available properties")
            return []

    async def is_valid_file(self, path: Path) -> bool:
        """Check that a path is an existing, probe-able container."""
        try:
            return await self.introspector.validate(Path(path))
        except Exception:
            logger.exception("Error validating MKV file: %s", path)
            return False

    async def read_file_properties(self, path: Path) -> FileInfo:
        """Read a file's tracks and its editable boolean properties.

        Boolean properties all carry the fixed baseline value "0" rather than
        per-track state; per-track flags are on the TrackInfo entries.
        """
        path = Path(path)
        logger.info("Reading properties from MKV file: %s", path)

        try:
            if not await self.introspector.validate(path):
                return FileInfo.invalid(path, INVALID_FILE_MESSAGE)

            identified = await self.introspector.identify(path)
            flags = boolean_flag_properties(await self.catalog.list())
            properties = [p.with_value(BOOLEAN_BASELINE_VALUE) for p in flags]
        except MediaIntrospectionError as e:
            logger.error("Failed to identify %s: %s", path, e)
            return FileInfo.invalid(path, str(e))
        except Exception as e:
            logger.exception("Error reading file properties")
            return FileInfo.invalid(path, str(e))

        logger.info(
            "Successfully read MKV file with %d tracks and %d properties",
            len(identified.tracks),
            len(properties),
        )
        return FileInfo(
            file_path=path,
            properties=properties,
            tracks=identified.tracks,
            segment_title=identified.segment_title,
        )

    async def apply_changes(
        self, path: Path, changes: list[PropertyChange]
    ) -> EditResult:
        """Apply a batch of changes in one mkvpropedit run."""
        try:
            return await self.executor.apply(Path(path), list(changes))
        except Exception as e:
            logger.exception("Error applying changes")
            return EditResult(success=False, error_message=str(e))

    async def set_track_flag(
        self,
        path: Path,
        ordinal: int,
        property_name: str,
        value: bool,
    ) -> EditResult:
        """Toggle a boolean flag on one track.

        Reads the file's current tracks and, for exclusive flags such as
        flag-default, clears the flag on other tracks of the same type in the
        same batch.
        """
        info = await self.read_file_properties(path)
        if not info.is_valid:
            return EditResult(success=False, error_message=info.error_message)

        try:
            changes = build_flag_changes(info.tracks, ordinal, property_name, value)
        except ValueError as e:
            return EditResult(success=False, error_message=str(e))

        return await self.apply_changes(path, changes)
