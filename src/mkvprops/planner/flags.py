"""Derive flag change batches from current track state.

Setting a track's default flag should clear it on the other tracks of the
same type. build_flag_changes produces that batch from the TrackInfo list,
so callers don't have to assemble it themselves.
"""

from __future__ import annotations

from collections.abc import Sequence

from mkvprops.domain.enums import ChangeType
from mkvprops.domain.models import PropertyChange, TrackInfo

FLAG_DEFAULT = "flag-default"

# Flags that at most one track of each type may carry
EXCLUSIVE_FLAGS: frozenset[str] = frozenset({FLAG_DEFAULT})

# Track types whose flags are not editable through this path
READ_ONLY_TRACK_TYPES: frozenset[str] = frozenset({"video"})


def _flag_change(track: TrackInfo, property_name: str, value: bool) -> PropertyChange:
    return PropertyChange(
        property_name=property_name,
        section=track.section,
        change_type=ChangeType.SET,
        new_value="1" if value else "0",
    )


def build_flag_changes(
    tracks: Sequence[TrackInfo],
    ordinal: int,
    property_name: str,
    value: bool,
    exclusive: bool | None = None,
) -> list[PropertyChange]:
    """Build the change batch for toggling a boolean flag on one track.

    When turning an exclusive flag on, every other track of the same type
    that currently has the flag set gets a ``<flag>=0`` change first, then
    the target track gets ``<flag>=1``.

    Args:
        tracks: Current track list of the file.
        ordinal: 1-based ordinal of the target track.
        property_name: Flag property (e.g. "flag-default").
        value: New flag value.
        exclusive: Force exclusive handling on or off. None uses
            EXCLUSIVE_FLAGS.

    Returns:
        Ordered list of changes; clears come before the set.

    Raises:
        ValueError: If no track has the ordinal, or the track type is
            read-only.
    """
    target = next((t for t in tracks if t.ordinal == ordinal), None)
    if target is None:
        raise ValueError(f"No track with ordinal {ordinal}")
    if target.track_type in READ_ONLY_TRACK_TYPES:
        raise ValueError(
            f"{target.track_type.capitalize()} track properties cannot be modified"
        )

    if exclusive is None:
        exclusive = property_name in EXCLUSIVE_FLAGS

    changes: list[PropertyChange] = []
    if value and exclusive:
        for track in tracks:
            if track.ordinal == ordinal or track.track_type != target.track_type:
                continue
            if track.flag_value(property_name):
                changes.append(_flag_change(track, property_name, False))

    changes.append(_flag_change(target, property_name, value))
    return changes
