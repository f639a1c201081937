"""Edit-target sections.

mkvpropedit addresses segment information as ``info`` and tracks as
``track:<n>`` where ``n`` is the 1-based position of the track in the file's
track list. Sections are kept as typed values and only turned into selector
strings when the command line is built.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

INFO_SELECTOR = "info"

_TRACK_SELECTOR_RE = re.compile(r"^track:(\d+)$")


@dataclass(frozen=True)
class InfoSection:
    """The segment information section."""

    @property
    def selector(self) -> str:
        return INFO_SELECTOR

    @property
    def is_info(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.selector


@dataclass(frozen=True)
class TrackSection:
    """A track addressed by its sequential ordinal (1-based)."""

    ordinal: int

    def __post_init__(self) -> None:
        if isinstance(self.ordinal, bool) or not isinstance(self.ordinal, int):
            raise TypeError(
                f"Track ordinal must be an int, got {type(self.ordinal).__name__}"
            )
        if self.ordinal < 1:
            raise ValueError(f"Track ordinal must be >= 1, got {self.ordinal}")

    @property
    def selector(self) -> str:
        return f"track:{self.ordinal}"

    @property
    def is_info(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.selector


Section = InfoSection | TrackSection

INFO = InfoSection()


def parse_section(value: str) -> Section:
    """Parse a selector string into a Section.

    Args:
        value: ``"info"`` or ``"track:<ordinal>"``.

    Returns:
        The matching Section.

    Raises:
        ValueError: If the selector is malformed or not a string.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid section selector: {value!r}")
    text = value.strip()
    if text == INFO_SELECTOR:
        return INFO
    match = _TRACK_SELECTOR_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid section selector: {value!r}")
    return TrackSection(int(match.group(1)))
