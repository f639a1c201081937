"""Domain models for mkvprops.

These models describe the catalog of editable properties, the track state read
from a container, requested property changes, and edit outcomes. Each model
serializes to a JSON-compatible dict with ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from mkvprops.domain.enums import ChangeType, PropertySection, PropertyType
from mkvprops.domain.sections import Section, TrackSection, parse_section

# Values mkvpropedit accepts as "true" for boolean properties
_TRUE_VALUES = frozenset({"1", "true", "yes"})


@dataclass(frozen=True)
class PropertyDefinition:
    """An editable property as listed by mkvpropedit."""

    name: str
    display_name: str
    type: PropertyType
    section: PropertySection
    description: str = ""
    current_value: str | None = None

    @property
    def boolean_value(self) -> bool:
        """True when this is a boolean property whose value reads as true."""
        return (
            self.type is PropertyType.BOOLEAN
            and self.current_value is not None
            and self.current_value.casefold() in _TRUE_VALUES
        )

    def with_value(self, value: str | None) -> PropertyDefinition:
        """Return a copy carrying the given current value."""
        return replace(self, current_value=value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "type": self.type.value,
            "section": self.section.value,
            "description": self.description,
            "current_value": self.current_value,
        }


@dataclass(frozen=True)
class TrackInfo:
    """A track as reported by mkvmerge.

    ``track_number`` is the container-assigned id (0-based in mkvmerge output).
    ``ordinal`` is the 1-based position in the reported track list and is the
    value mkvpropedit uses in ``track:<n>`` selectors. The two are unrelated.
    """

    track_number: int
    ordinal: int
    track_type: str  # "video", "audio", "subtitles", "buttons", ...
    name: str | None = None
    language: str | None = None
    language_ietf: str | None = None
    language_legacy: str | None = None
    is_default: bool = False
    is_enabled: bool = False
    is_forced: bool = False

    @property
    def section(self) -> TrackSection:
        """Edit section addressing this track."""
        return TrackSection(self.ordinal)

    def flag_value(self, property_name: str) -> bool | None:
        """Return the current value of a track flag property, if known."""
        return {
            "flag-default": self.is_default,
            "flag-enabled": self.is_enabled,
            "flag-forced": self.is_forced,
        }.get(property_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "track_number": self.track_number,
            "ordinal": self.ordinal,
            "track_type": self.track_type,
            "name": self.name,
            "language": self.language,
            "language_ietf": self.language_ietf,
            "language_legacy": self.language_legacy,
            "is_default": self.is_default,
            "is_enabled": self.is_enabled,
            "is_forced": self.is_forced,
        }


@dataclass
class FileInfo:
    """Result of reading a container's properties and tracks.

    An invalid FileInfo never carries properties or tracks.
    """

    file_path: Path
    properties: list[PropertyDefinition] = field(default_factory=list)
    tracks: list[TrackInfo] = field(default_factory=list)
    is_valid: bool = True
    error_message: str | None = None
    segment_title: str | None = None

    @classmethod
    def invalid(cls, file_path: Path, error_message: str) -> FileInfo:
        """Build the invalid form for a path that failed validation or probing."""
        return cls(
            file_path=file_path,
            properties=[],
            tracks=[],
            is_valid=False,
            error_message=error_message,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": str(self.file_path),
            "properties": [p.to_dict() for p in self.properties],
            "tracks": [t.to_dict() for t in self.tracks],
            "is_valid": self.is_valid,
            "error_message": self.error_message,
            "segment_title": self.segment_title,
        }


@dataclass(frozen=True)
class PropertyChange:
    """A single requested property mutation.

    ``new_value`` is string-encoded whatever the property's type. Set and Add
    require a value; Delete ignores it.
    """

    property_name: str
    section: Section
    change_type: ChangeType = ChangeType.SET
    new_value: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.property_name, str):
            raise ValueError(
                f"property_name must be a string, got {self.property_name!r}"
            )
        if not self.property_name.strip():
            raise ValueError("property_name must not be empty")
        if self.change_type is not ChangeType.DELETE and self.new_value is None:
            raise ValueError(
                f"{self.change_type.value} of {self.property_name} requires a value"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PropertyChange:
        """Build a change from its dict form.

        ``section`` is a selector string (``"info"`` or ``"track:<n>"``) and
        ``change_type`` is one of ``"set"``, ``"delete"``, ``"add"`` or the
        matching ordinal 0, 1, 2. A negative ordinal is rejected.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Property change must be an object, got {data!r}")
        try:
            name = data["property_name"]
        except KeyError as e:
            raise ValueError(f"Missing field in property change: {e}") from e
        section = data.get("section", "info")
        if not isinstance(name, str):
            raise ValueError(f"property_name must be a string, got {name!r}")
        if not isinstance(section, str):
            raise ValueError(f"section must be a selector string, got {section!r}")
        raw_type = data.get("change_type", "set")
        if isinstance(raw_type, int) and not isinstance(raw_type, bool):
            # Ordinal form: 0 = set, 1 = delete, 2 = add
            kinds = list(ChangeType)
            if not 0 <= raw_type < len(kinds):
                raise ValueError(f"Invalid change_type: {raw_type}")
            change_type = kinds[raw_type]
        else:
            change_type = ChangeType(str(raw_type).casefold())
        new_value = data.get("new_value")
        return cls(
            property_name=name,
            section=parse_section(section),
            change_type=change_type,
            new_value=None if new_value is None else str(new_value),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "property_name": self.property_name,
            "section": self.section.selector,
            "change_type": self.change_type.value,
            "new_value": self.new_value,
        }


@dataclass
class EditResult:
    """Outcome of applying a batch of property changes."""

    success: bool
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)
    exit_code: int = 0

    def __post_init__(self) -> None:
        if self.warnings is None:
            self.warnings = []

    @property
    def has_warnings(self) -> bool:
        """True for partial success or when warning lines were reported."""
        return bool(self.warnings) or (self.success and self.error_message is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error_message": self.error_message,
            "warnings": list(self.warnings),
            "exit_code": self.exit_code,
        }
