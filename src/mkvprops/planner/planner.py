"""Translate property changes into mkvpropedit arguments.

Changes are grouped by section in order of first appearance. Each track
group is preceded by ``--edit <selector>``. Info is mkvpropedit's default
edit target and needs no selector while it comes first. An ``--edit``
stays in effect until the next one, so an info group after a track group is
selected with ``--edit info``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from mkvprops.domain.enums import ChangeType
from mkvprops.domain.models import PropertyChange
from mkvprops.domain.sections import Section

logger = logging.getLogger(__name__)


def group_by_section(
    changes: Iterable[PropertyChange],
) -> dict[Section, list[PropertyChange]]:
    """Group changes by section, keeping first-appearance order of sections."""
    groups: dict[Section, list[PropertyChange]] = {}
    for change in changes:
        groups.setdefault(change.section, []).append(change)
    return groups


def change_to_args(change: PropertyChange) -> list[str]:
    """Convert one change to its mkvpropedit directive."""
    if change.change_type is ChangeType.SET:
        return ["--set", f"{change.property_name}={change.new_value}"]
    if change.change_type is ChangeType.DELETE:
        return ["--delete", change.property_name]
    if change.change_type is ChangeType.ADD:
        return ["--add", f"{change.property_name}={change.new_value}"]
    raise ValueError(f"Unsupported change type: {change.change_type}")


class ChangePlanner:
    """Builds mkvpropedit argument lists from property changes.

    The planner applies changes exactly as given. It does not add or remove
    changes to keep a single default track per type; use
    :func:`mkvprops.planner.flags.build_flag_changes` for that.
    """

    def iter_directives(self, changes: Iterable[PropertyChange]) -> Iterator[str]:
        """Yield edit directives (without the file path) for the changes."""
        for position, (section, group) in enumerate(group_by_section(changes).items()):
            if position > 0 or not section.is_info:
                yield from ["--edit", section.selector]
            for change in group:
                yield from change_to_args(change)

    def plan(self, file_path: Path, changes: list[PropertyChange]) -> list[str]:
        """Build the argument list for one mkvpropedit invocation.

        Args:
            file_path: Container to edit.
            changes: Requested changes.

        Returns:
            ``[file_path, directives...]``, or an empty list when there are
            no changes.
        """
        if not changes:
            return []
        args = [str(file_path), *self.iter_directives(changes)]
        logger.debug(
            "Planned %d changes for %s",
            len(changes),
            file_path,
            extra={"file_path": str(file_path), "change_count": len(changes)},
        )
        return args
