"""External tool resolution.

This module locates the mkvtoolnix executables mkvprops depends on. A
configured path wins over PATH lookup; mkvmerge is additionally looked for
next to mkvpropedit, since both ship in the same mkvtoolnix directory.
"""

import logging
import shutil
import sys
from pathlib import Path

from mkvprops.exceptions import ToolNotAvailableError

logger = logging.getLogger(__name__)

MKVPROPEDIT = "mkvpropedit"
MKVMERGE = "mkvmerge"

INSTALL_HINTS: dict[str, str] = {
    MKVPROPEDIT: "Install mkvtoolnix: https://mkvtoolnix.download/",
    MKVMERGE: "Install mkvtoolnix: https://mkvtoolnix.download/",
}


def _executable_name(name: str) -> str:
    return f"{name}.exe" if sys.platform == "win32" else name


def find_tool(
    name: str,
    configured_path: Path | None = None,
    search_dirs: tuple[Path, ...] = (),
) -> Path | None:
    """Find a tool executable.

    Lookup order: configured path, then each of ``search_dirs``, then PATH.

    Args:
        name: Tool name (e.g., "mkvpropedit").
        configured_path: Optional configured path override.
        search_dirs: Extra directories checked before PATH.

    Returns:
        Path to the tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    for directory in search_dirs:
        candidate = directory / _executable_name(name)
        if candidate.is_file():
            logger.debug("Using %s at: %s", name, candidate)
            return candidate

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def require_tool(
    name: str,
    configured_path: Path | None = None,
    search_dirs: tuple[Path, ...] = (),
) -> Path:
    """Get the path to a required tool, raising if it is not available.

    Args:
        name: Tool name.
        configured_path: Optional configured path override.
        search_dirs: Extra directories checked before PATH.

    Returns:
        Path to the tool executable.

    Raises:
        ToolNotAvailableError: If the tool cannot be found.
    """
    path = find_tool(name, configured_path, search_dirs)
    if path is None:
        logger.error("%s not found", name)
        raise ToolNotAvailableError(name, INSTALL_HINTS.get(name, ""))
    return path


def resolve_mkvtoolnix(
    mkvpropedit_path: Path | None = None,
    mkvmerge_path: Path | None = None,
) -> tuple[Path, Path]:
    """Resolve both mkvtoolnix executables.

    mkvmerge is searched for in mkvpropedit's directory before PATH.

    Returns:
        Tuple of (mkvpropedit path, mkvmerge path).

    Raises:
        ToolNotAvailableError: If either tool cannot be found.
    """
    mkvpropedit = require_tool(MKVPROPEDIT, mkvpropedit_path)
    mkvmerge = require_tool(
        MKVMERGE, mkvmerge_path, search_dirs=(mkvpropedit.parent,)
    )
    return mkvpropedit, mkvmerge
