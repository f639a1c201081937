"""External tool resolution for mkvtoolnix executables."""

from mkvprops.tools.detection import (
    MKVMERGE,
    MKVPROPEDIT,
    find_tool,
    require_tool,
    resolve_mkvtoolnix,
)

__all__ = [
    "MKVMERGE",
    "MKVPROPEDIT",
    "find_tool",
    "require_tool",
    "resolve_mkvtoolnix",
]
