"""Tests for API request models."""

import pytest
from pydantic import ValidationError

from mkvprops.domain.enums import ChangeType
from mkvprops.domain.sections import INFO, TrackSection
from mkvprops.server.api.models import (
    ApplyChangesRequest,
    FilePathRequest,
    PropertyChangeModel,
    TrackFlagRequest,
)


class TestFilePathRequest:
    """Tests for FilePathRequest."""

    def test_requires_path(self):
        """path is required and non-empty."""
        with pytest.raises(ValidationError):
            FilePathRequest.model_validate({})
        with pytest.raises(ValidationError):
            FilePathRequest.model_validate({"path": ""})

    def test_rejects_unknown_fields(self):
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            FilePathRequest.model_validate({"path": "/a.mkv", "force": True})


class TestPropertyChangeModel:
    """Tests for PropertyChangeModel."""

    def test_to_change(self):
        """Models convert to domain changes."""
        model = PropertyChangeModel.model_validate(
            {
                "property_name": "flag-default",
                "section": "track:2",
                "change_type": "Set",
                "new_value": True,
            }
        )

        change = model.to_change()

        assert change.section == TrackSection(2)
        assert change.change_type is ChangeType.SET
        assert change.new_value == "1"

    def test_defaults(self):
        """Section defaults to info and type to set."""
        change = PropertyChangeModel(property_name="title", new_value="T").to_change()

        assert change.section == INFO
        assert change.change_type is ChangeType.SET

    def test_ordinal_change_type(self):
        """Ordinal change types are accepted."""
        model = PropertyChangeModel.model_validate(
            {"property_name": "name", "change_type": 1}
        )

        assert model.change_type is ChangeType.DELETE

    @pytest.mark.parametrize(
        "data",
        [
            {"property_name": "x", "section": "track:0"},
            {"property_name": "x", "section": "chapter"},
            {"property_name": "x", "change_type": "rename"},
            {"property_name": "x", "change_type": 7},
            {"property_name": ""},
        ],
    )
    def test_invalid(self, data):
        """Malformed changes are rejected."""
        with pytest.raises(ValidationError):
            PropertyChangeModel.model_validate(data)

    def test_set_without_value_fails_conversion(self):
        """A set without a value fails when converted."""
        model = PropertyChangeModel(property_name="title")

        with pytest.raises(ValueError):
            model.to_change()


class TestCompositeRequests:
    """Tests for ApplyChangesRequest and TrackFlagRequest."""

    def test_apply_request(self):
        """Changes are parsed as a list of models."""
        request = ApplyChangesRequest.model_validate(
            {
                "path": "/a.mkv",
                "changes": [{"property_name": "title", "new_value": "T"}],
            }
        )

        assert len(request.changes) == 1

    def test_flag_request_ordinal_positive(self):
        """Track ordinals start at 1."""
        with pytest.raises(ValidationError):
            TrackFlagRequest.model_validate(
                {
                    "path": "/a.mkv",
                    "ordinal": 0,
                    "property": "flag-default",
                    "value": True,
                }
            )
