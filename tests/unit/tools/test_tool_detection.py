"""Tests for mkvtoolnix executable resolution."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mkvprops.exceptions import ToolNotAvailableError
from mkvprops.tools.detection import find_tool, require_tool, resolve_mkvtoolnix


def _make_tool(directory: Path, name: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


class TestFindTool:
    """Tests for find_tool."""

    def test_configured_path_wins(self, tmp_path):
        """An existing configured path is returned as-is."""
        tool = _make_tool(tmp_path, "mkvpropedit")

        with patch("mkvprops.tools.detection.shutil.which") as mock_which:
            assert find_tool("mkvpropedit", tool) == tool
        mock_which.assert_not_called()

    def test_missing_configured_path_falls_back_to_path(self, tmp_path):
        """A missing configured path falls back to PATH lookup."""
        with patch(
            "mkvprops.tools.detection.shutil.which",
            return_value="/usr/bin/mkvpropedit",
        ):
            result = find_tool("mkvpropedit", tmp_path / "missing")

        assert result == Path("/usr/bin/mkvpropedit")

    def test_search_dirs_before_path(self, tmp_path):
        """Search directories are checked before PATH."""
        tool = _make_tool(tmp_path / "mkvtoolnix", "mkvmerge")

        with patch(
            "mkvprops.tools.detection.shutil.which", return_value="/usr/bin/mkvmerge"
        ):
            result = find_tool("mkvmerge", search_dirs=(tool.parent,))

        assert result == tool

    def test_not_found(self):
        """None is returned when the tool is nowhere."""
        with patch("mkvprops.tools.detection.shutil.which", return_value=None):
            assert find_tool("mkvpropedit") is None


class TestRequireTool:
    """Tests for require_tool."""

    def test_raises_with_install_hint(self):
        """A missing tool raises ToolNotAvailableError with a hint."""
        with patch("mkvprops.tools.detection.shutil.which", return_value=None):
            with pytest.raises(ToolNotAvailableError) as exc_info:
                require_tool("mkvpropedit")

        assert exc_info.value.tool_name == "mkvpropedit"
        assert "mkvtoolnix" in str(exc_info.value)


class TestResolveMkvtoolnix:
    """Tests for resolve_mkvtoolnix."""

    def test_mkvmerge_found_next_to_mkvpropedit(self, tmp_path):
        """mkvmerge in mkvpropedit's directory beats PATH."""
        mkvpropedit = _make_tool(tmp_path / "mkvtoolnix", "mkvpropedit")
        mkvmerge = _make_tool(tmp_path / "mkvtoolnix", "mkvmerge")

        with patch(
            "mkvprops.tools.detection.shutil.which", return_value="/usr/bin/mkvmerge"
        ):
            result = resolve_mkvtoolnix(mkvpropedit_path=mkvpropedit)

        assert result == (mkvpropedit, mkvmerge)

    def test_missing_mkvmerge_raises(self, tmp_path):
        """A missing mkvmerge raises even when mkvpropedit is present."""
        mkvpropedit = _make_tool(tmp_path / "only", "mkvpropedit")

        with patch("mkvprops.tools.detection.shutil.which", return_value=None):
            with pytest.raises(ToolNotAvailableError) as exc_info:
                resolve_mkvtoolnix(mkvpropedit_path=mkvpropedit)

        assert exc_info.value.tool_name == "mkvmerge"
