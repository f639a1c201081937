"""Domain enums for mkvprops.

Value types reported by ``mkvpropedit --list-property-names`` and the kinds
of change a property edit can make.
"""

from enum import Enum


class PropertyType(Enum):
    """Value type of an editable Matroska property."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    UNSIGNED_INTEGER = "unsigned_integer"
    FLOAT = "float"
    BINARY = "binary"
    UNKNOWN = "unknown"


class ChangeType(Enum):
    """Kind of change applied to a property.

    Maps onto the mkvpropedit directives --set, --delete and --add.
    """

    SET = "set"
    DELETE = "delete"
    ADD = "add"


class PropertySection(Enum):
    """Section affinity of a property definition."""

    TRACK = "track"
    INFO = "info"
