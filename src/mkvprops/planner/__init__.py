"""Change planning for mkvpropedit edits."""

from mkvprops.planner.flags import (
    EXCLUSIVE_FLAGS,
    FLAG_DEFAULT,
    build_flag_changes,
)
from mkvprops.planner.planner import ChangePlanner, change_to_args, group_by_section

__all__ = [
    "EXCLUSIVE_FLAGS",
    "FLAG_DEFAULT",
    "ChangePlanner",
    "build_flag_changes",
    "change_to_args",
    "group_by_section",
]
