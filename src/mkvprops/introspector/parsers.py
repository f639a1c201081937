"""Pure parsing functions for mkvmerge identify output.

``mkvmerge -J`` produces JSON; ``mkvmerge --identify`` produces lines such as
``Track ID 1: audio (AAC)``. JSON is parsed first and the text form is the
fallback when the JSON is missing or malformed. All functions are pure (no
I/O, no side effects) for easy testing.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from mkvprops.domain.models import TrackInfo

logger = logging.getLogger(__name__)

UNDETERMINED_LANGUAGE = "und"

_TEXT_TRACK_RE = re.compile(r"Track ID (\d+): (\w+)")


class IdentifyParseError(ValueError):
    """Raised when mkvmerge JSON does not have the expected track layout."""


@dataclass(frozen=True)
class _OptionalField:
    """An optional key of a track's ``properties`` object."""

    key: str
    kind: type
    default: Any


# Optional fields read from each track's "properties" object. A missing key
# or a value of the wrong type yields the default.
TRACK_PROPERTY_SCHEMA: dict[str, _OptionalField] = {
    "name": _OptionalField("track_name", str, None),
    "language_ietf": _OptionalField("language_ietf", str, None),
    "language_legacy": _OptionalField("language", str, None),
    "is_default": _OptionalField("default_track", bool, False),
    "is_enabled": _OptionalField("enabled_track", bool, False),
    "is_forced": _OptionalField("forced_track", bool, False),
}


@dataclass
class IdentifyResult:
    """Tracks and container details decoded from identify output."""

    tracks: list[TrackInfo] = field(default_factory=list)
    segment_title: str | None = None
    used_fallback: bool = False


def resolve_language(
    language_ietf: str | None, language_legacy: str | None
) -> str | None:
    """Pick the language to display for a track.

    The IETF tag wins when present and not "und"; otherwise the legacy
    ISO 639-2 code when present and not "und"; otherwise None.
    """
    for candidate in (language_ietf, language_legacy):
        if candidate and candidate != UNDETERMINED_LANGUAGE:
            return candidate
    return None


def _read_optional(properties: dict, field_def: _OptionalField) -> Any:
    value = properties.get(field_def.key)
    if isinstance(value, field_def.kind):
        return value
    return field_def.default


def parse_track(entry: dict, ordinal: int) -> TrackInfo:
    """Parse a single entry of the mkvmerge JSON ``tracks`` array.

    Args:
        entry: Track object from ``mkvmerge -J``.
        ordinal: 1-based position of the track in the list.

    Returns:
        TrackInfo domain object.

    Raises:
        IdentifyParseError: If the entry lacks an integer ``id``.
    """
    if not isinstance(entry, dict):
        raise IdentifyParseError(f"Track entry is not an object: {entry!r}")
    track_id = entry.get("id")
    if isinstance(track_id, bool) or not isinstance(track_id, int):
        raise IdentifyParseError(f"Track entry has no integer id: {entry!r}")

    raw_type = entry.get("type")
    track_type = raw_type.casefold() if isinstance(raw_type, str) else "unknown"

    properties = entry.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    values = {
        attr: _read_optional(properties, field_def)
        for attr, field_def in TRACK_PROPERTY_SCHEMA.items()
    }

    return TrackInfo(
        track_number=track_id,
        ordinal=ordinal,
        track_type=track_type,
        language=resolve_language(values["language_ietf"], values["language_legacy"]),
        **values,
    )


def parse_identify_json(data: Any) -> IdentifyResult:
    """Parse decoded ``mkvmerge -J`` output.

    Raises:
        IdentifyParseError: If ``tracks`` is missing or malformed.
    """
    if not isinstance(data, dict):
        raise IdentifyParseError("Identify output is not a JSON object")
    entries = data.get("tracks")
    if not isinstance(entries, list):
        raise IdentifyParseError("Identify output has no tracks array")

    tracks = [parse_track(entry, ordinal) for ordinal, entry in enumerate(entries, 1)]

    segment_title = None
    container = data.get("container")
    if isinstance(container, dict):
        container_props = container.get("properties")
        if isinstance(container_props, dict):
            title = container_props.get("title")
            if isinstance(title, str) and title:
                segment_title = title

    return IdentifyResult(tracks=tracks, segment_title=segment_title)


def parse_identify_text(output: str) -> list[TrackInfo]:
    """Parse plain ``mkvmerge --identify`` output.

    Only id and type are recoverable. Tracks are assumed enabled since the
    text form carries no enabled flag.
    """
    tracks: list[TrackInfo] = []
    for line in output.splitlines():
        match = _TEXT_TRACK_RE.search(line)
        if match is None:
            continue
        tracks.append(
            TrackInfo(
                track_number=int(match.group(1)),
                ordinal=len(tracks) + 1,
                track_type=match.group(2).casefold(),
                is_default=False,
                is_enabled=True,
                is_forced=False,
            )
        )
    return tracks


def parse_identify_output(output: str, file_path: str | None = None) -> IdentifyResult:
    """Parse identify output, falling back to the text format.

    Args:
        output: Stdout of ``mkvmerge -J`` (or ``--identify``).
        file_path: Optional file path for log context.

    Returns:
        IdentifyResult; ``used_fallback`` is True when the text parser ran.
    """
    try:
        return parse_identify_json(json.loads(output))
    except (json.JSONDecodeError, IdentifyParseError) as e:
        logger.error(
            "Failed to parse JSON output from mkvmerge identify%s: %s",
            f" for {file_path}" if file_path else "",
            e,
        )
    return IdentifyResult(tracks=parse_identify_text(output), used_fallback=True)
