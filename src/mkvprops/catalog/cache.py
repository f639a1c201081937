"""Cached catalog of editable properties.

The catalog is fetched from mkvpropedit on first use and kept for the life of
the PropertyCatalog object. Concurrent first callers share a single fetch.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from mkvprops.catalog.parsers import parse_property_list
from mkvprops.core.subprocess_utils import CommandRunner, run_command_async
from mkvprops.domain.models import PropertyDefinition

logger = logging.getLogger(__name__)

LIST_PROPERTY_NAMES_FLAG = "--list-property-names"


class PropertyCatalog:
    """Lazily-fetched, memoized list of mkvpropedit property definitions.

    A failed listing (non-zero exit or error) yields an empty list and is not
    memoized, so a later call tries again.
    """

    def __init__(
        self,
        tool_path: Path,
        runner: CommandRunner = run_command_async,
        timeout: float | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            tool_path: Path to mkvpropedit.
            runner: Coroutine used to run commands.
            timeout: Timeout in seconds for the listing command.
        """
        self._tool_path = tool_path
        self._runner = runner
        self._timeout = timeout
        self._definitions: list[PropertyDefinition] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        """True once a listing has been fetched successfully."""
        return self._definitions is not None

    async def list(self) -> list[PropertyDefinition]:
        """Return all property definitions, fetching them on first use."""
        if self._definitions is not None:
            return list(self._definitions)

        async with self._lock:
            if self._definitions is None:
                fetched = await self._fetch()
                if fetched is None:
                    return []
                self._definitions = fetched
        return list(self._definitions)

    def invalidate(self) -> None:
        """Drop the memoized listing so the next call fetches again."""
        self._definitions = None

    async def _fetch(self) -> list[PropertyDefinition] | None:
        logger.info("Getting available MKV properties from mkvpropedit")
        try:
            result = await self._runner(
                [self._tool_path, LIST_PROPERTY_NAMES_FLAG], timeout=self._timeout
            )
        except Exception:
            logger.exception("Error getting available properties")
            return None

        if result.exit_code != 0:
            logger.error(
                "Failed to get property names. Exit code: %d, Error: %s",
                result.exit_code,
                result.stderr,
            )
            return None

        definitions = parse_property_list(result.stdout)
        logger.info("Loaded %d available MKV properties", len(definitions))
        return definitions
