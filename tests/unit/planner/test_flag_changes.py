"""Tests for build_flag_changes."""

import pytest

from mkvprops.domain.enums import ChangeType
from mkvprops.domain.models import TrackInfo
from mkvprops.domain.sections import TrackSection
from mkvprops.planner import build_flag_changes


@pytest.fixture
def tracks() -> list[TrackInfo]:
    """Video, two audio and one subtitle track."""
    return [
        TrackInfo(track_number=0, ordinal=1, track_type="video", is_default=True),
        TrackInfo(track_number=1, ordinal=2, track_type="audio", is_default=True),
        TrackInfo(track_number=2, ordinal=3, track_type="audio"),
        TrackInfo(
            track_number=3,
            ordinal=4,
            track_type="subtitles",
            is_default=True,
            is_forced=True,
        ),
    ]


def _summary(changes):
    return [(c.section, c.property_name, c.new_value) for c in changes]


class TestBuildFlagChanges:
    """Tests for build_flag_changes."""

    def test_default_clears_same_type_first(self, tracks):
        """Setting default clears it on other tracks of the same type first."""
        changes = build_flag_changes(tracks, 3, "flag-default", True)

        assert _summary(changes) == [
            (TrackSection(2), "flag-default", "0"),
            (TrackSection(3), "flag-default", "1"),
        ]
        assert all(c.change_type is ChangeType.SET for c in changes)

    def test_other_types_untouched(self, tracks):
        """Tracks of other types keep their default flag."""
        changes = build_flag_changes(tracks, 3, "flag-default", True)

        sections = {c.section for c in changes}
        assert TrackSection(1) not in sections
        assert TrackSection(4) not in sections

    def test_turning_off_has_no_clears(self, tracks):
        """Clearing a flag only touches the target track."""
        changes = build_flag_changes(tracks, 2, "flag-default", False)

        assert _summary(changes) == [(TrackSection(2), "flag-default", "0")]

    def test_non_exclusive_flag(self, tracks):
        """Forced is not exclusive."""
        changes = build_flag_changes(tracks, 2, "flag-forced", True)

        assert _summary(changes) == [(TrackSection(2), "flag-forced", "1")]

    def test_exclusive_override(self, tracks):
        """exclusive=False turns off clearing for flag-default."""
        changes = build_flag_changes(tracks, 3, "flag-default", True, exclusive=False)

        assert _summary(changes) == [(TrackSection(3), "flag-default", "1")]

    def test_exclusive_forced_flag(self, tracks):
        """exclusive=True clears any flag on other same-type tracks."""
        tracks.append(TrackInfo(track_number=4, ordinal=5, track_type="subtitles"))

        changes = build_flag_changes(tracks, 5, "flag-forced", True, exclusive=True)

        assert _summary(changes) == [
            (TrackSection(4), "flag-forced", "0"),
            (TrackSection(5), "flag-forced", "1"),
        ]

    def test_unknown_ordinal(self, tracks):
        """An ordinal not in the track list is rejected."""
        with pytest.raises(ValueError, match="No track with ordinal 9"):
            build_flag_changes(tracks, 9, "flag-default", True)

    def test_video_tracks_read_only(self, tracks):
        """Video track flags cannot be changed."""
        with pytest.raises(ValueError, match="Video track properties"):
            build_flag_changes(tracks, 1, "flag-default", False)
