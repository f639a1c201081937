"""Request models for the JSON API.

Request bodies are validated with pydantic before reaching the service.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mkvprops.domain.enums import ChangeType
from mkvprops.domain.models import PropertyChange
from mkvprops.domain.sections import parse_section


class FilePathRequest(BaseModel):
    """Body carrying a single file path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(min_length=1)


class PropertyChangeModel(BaseModel):
    """One requested property change."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    property_name: str = Field(min_length=1)
    section: str = "info"
    change_type: ChangeType = ChangeType.SET
    new_value: str | int | float | bool | None = None

    @field_validator("section")
    @classmethod
    def validate_section(cls, v: str) -> str:
        """Reject malformed section selectors."""
        return parse_section(v).selector

    @field_validator("change_type", mode="before")
    @classmethod
    def normalize_change_type(cls, v: object) -> object:
        """Accept change types case-insensitively or as ordinals 0, 1, 2."""
        if isinstance(v, int) and not isinstance(v, bool):
            kinds = list(ChangeType)
            if not 0 <= v < len(kinds):
                raise ValueError(f"Invalid change_type: {v}")
            return kinds[v]
        return v.casefold() if isinstance(v, str) else v

    def to_change(self) -> PropertyChange:
        """Convert to the domain PropertyChange."""
        new_value = self.new_value
        if isinstance(new_value, bool):
            new_value = "1" if new_value else "0"
        return PropertyChange(
            property_name=self.property_name,
            section=parse_section(self.section),
            change_type=self.change_type,
            new_value=None if new_value is None else str(new_value),
        )


class ApplyChangesRequest(FilePathRequest):
    """Body for POST /api/files/apply."""

    changes: list[PropertyChangeModel] = Field(default_factory=list)


class TrackFlagRequest(FilePathRequest):
    """Body for POST /api/files/flag."""

    ordinal: int = Field(ge=1)
    property: str = Field(min_length=1)
    value: bool
