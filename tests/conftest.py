"""Shared test fixtures for mkvprops."""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mkvprops.core.subprocess_utils import ProcessResult

PROPERTY_LISTING = """\
# Elements in the category 'Segment information':
title (string): Title

# Elements in the category 'Track headers':
flag-default (boolean): "Default track" flag
flag-enabled (boolean): "Enabled" flag
flag-forced (boolean): "Forced display" flag
language (string): Language
name (string): Name
track-number (unsigned integer): Track number
default-duration (unsigned integer): Default duration
"""

IDENTIFY_JSON = {
    "container": {"properties": {"title": "Sample Movie"}, "type": "Matroska"},
    "tracks": [
        {
            "id": 0,
            "type": "video",
            "properties": {
                "language": "und",
                "default_track": True,
                "enabled_track": True,
            },
        },
        {
            "id": 1,
            "type": "audio",
            "properties": {
                "track_name": "English",
                "language_ietf": "en-US",
                "language": "eng",
                "default_track": True,
                "enabled_track": True,
            },
        },
        {
            "id": 2,
            "type": "audio",
            "properties": {
                "language": "fre",
                "default_track": False,
                "enabled_track": True,
            },
        },
        {
            "id": 3,
            "type": "subtitles",
            "properties": {
                "language_ietf": "und",
                "language": "und",
                "forced_track": True,
            },
        },
    ],
}


@pytest.fixture
def property_listing() -> str:
    """Return sample ``mkvpropedit --list-property-names`` output."""
    return PROPERTY_LISTING


@pytest.fixture
def identify_json() -> str:
    """Return sample ``mkvmerge -J`` output."""
    return json.dumps(IDENTIFY_JSON)


@pytest.fixture
def mkv_file(tmp_path: Path) -> Path:
    """Create an empty file with a .mkv extension."""
    path = tmp_path / "movie.mkv"
    path.write_bytes(b"\x1a\x45\xdf\xa3")
    return path


@pytest.fixture
def tool_paths(tmp_path: Path) -> tuple[Path, Path]:
    """Create stand-in mkvpropedit and mkvmerge executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    mkvpropedit = bin_dir / "mkvpropedit"
    mkvmerge = bin_dir / "mkvmerge"
    for path in (mkvpropedit, mkvmerge):
        path.write_text("#!/bin/sh\n")
        path.chmod(0o755)
    return mkvpropedit, mkvmerge


@pytest.fixture
def fake_runner(property_listing: str, identify_json: str) -> AsyncMock:
    """Create a command runner that answers like mkvtoolnix.

    Set ``fake_runner.edit_result`` to change the mkvpropedit edit outcome.
    """
    runner = AsyncMock()
    runner.edit_result = ProcessResult(0, "The changes are written to the file.", "")

    async def respond(args, timeout=None):
        args = [str(a) for a in args]
        tool = Path(args[0]).name
        if tool == "mkvpropedit" and args[1:] == ["--list-property-names"]:
            return ProcessResult(0, property_listing, "")
        if tool == "mkvpropedit":
            return runner.edit_result
        if "--identify" in args:
            return ProcessResult(0, "File 'movie.mkv': container: Matroska", "")
        if "-J" in args:
            return ProcessResult(0, identify_json, "")
        return ProcessResult(2, "", f"unexpected command: {args}")

    runner.side_effect = respond
    return runner
