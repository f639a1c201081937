"""Pure parsing functions for ``mkvpropedit --list-property-names`` output.

Each listed property looks like::

    flag-default (boolean): "Default track" flag

Blank lines and lines starting with ``#`` are ignored. All functions are
pure (no I/O) for easy testing.
"""

import logging
import re

from mkvprops.domain.enums import PropertySection, PropertyType
from mkvprops.domain.models import PropertyDefinition

logger = logging.getLogger(__name__)

_PROPERTY_LINE_RE = re.compile(r"^(\S+)\s+\(([^)]+)\):\s*(.*)$")

_TYPE_LABELS: dict[str, PropertyType] = {
    "boolean": PropertyType.BOOLEAN,
    "string": PropertyType.STRING,
    "integer": PropertyType.INTEGER,
    "unsigned integer": PropertyType.UNSIGNED_INTEGER,
    "float": PropertyType.FLOAT,
    "binary": PropertyType.BINARY,
}

_TRACK_PREFIXES = ("flag-", "language", "name", "codec")

# Substrings marking a boolean property as a track flag shown to users
_FLAG_KEYWORDS = ("default", "enabled", "forced")


def map_property_type(label: str) -> PropertyType:
    """Map a type label to PropertyType (case-insensitive).

    Unrecognized labels map to PropertyType.UNKNOWN.
    """
    return _TYPE_LABELS.get(label.strip().casefold(), PropertyType.UNKNOWN)


def infer_section(name: str) -> PropertySection:
    """Infer which section a property belongs to from its name."""
    if name.startswith(_TRACK_PREFIXES) or "track" in name:
        return PropertySection.TRACK
    return PropertySection.INFO


def format_display_name(name: str) -> str:
    """Turn a property identifier into a display name.

    Example:
        >>> format_display_name("flag-hearing-impaired")
        'Flag Hearing Impaired'
    """
    words = name.replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def parse_property_line(line: str) -> PropertyDefinition | None:
    """Parse one listing line, returning None for blank, comment or other lines."""
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    match = _PROPERTY_LINE_RE.match(text)
    if match is None:
        return None

    name, type_label, description = match.groups()
    return PropertyDefinition(
        name=name,
        display_name=format_display_name(name),
        type=map_property_type(type_label),
        section=infer_section(name),
        description=description,
    )


def parse_property_list(output: str) -> list[PropertyDefinition]:
    """Parse the full property listing.

    Args:
        output: Stdout of ``mkvpropedit --list-property-names``.

    Returns:
        Property definitions in listing order. Duplicate names keep the
        first occurrence.
    """
    properties: list[PropertyDefinition] = []
    seen: set[str] = set()

    for line in output.splitlines():
        definition = parse_property_line(line)
        if definition is None:
            continue
        if definition.name in seen:
            logger.debug("Duplicate property name %s, skipping", definition.name)
            continue
        seen.add(definition.name)
        properties.append(definition)

    return properties


def is_flag_property(definition: PropertyDefinition) -> bool:
    """True for boolean properties presented as track flags."""
    if definition.type is not PropertyType.BOOLEAN:
        return False
    name = definition.name
    return name.startswith("flag-") or any(k in name for k in _FLAG_KEYWORDS)


def boolean_flag_properties(
    definitions: list[PropertyDefinition],
) -> list[PropertyDefinition]:
    """Filter a catalog down to its boolean track flags."""
    return [d for d in definitions if is_flag_property(d)]
