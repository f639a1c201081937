"""Domain models for mkvprops."""

from mkvprops.domain.enums import ChangeType, PropertySection, PropertyType
from mkvprops.domain.models import (
    EditResult,
    FileInfo,
    PropertyChange,
    PropertyDefinition,
    TrackInfo,
)
from mkvprops.domain.sections import (
    INFO,
    InfoSection,
    Section,
    TrackSection,
    parse_section,
)

__all__ = [
    # Enums
    "ChangeType",
    "PropertySection",
    "PropertyType",
    # Models
    "EditResult",
    "FileInfo",
    "PropertyChange",
    "PropertyDefinition",
    "TrackInfo",
    # Sections
    "INFO",
    "InfoSection",
    "Section",
    "TrackSection",
    "parse_section",
]
