"""Tests for configuration data models."""

import pytest

from mkvprops.config.env import EnvReader
from mkvprops.config.models import (
    ContainerConfig,
    LoggingConfig,
    ProcessConfig,
    ServerConfig,
)


class TestConfigModels:
    """Validation in configuration dataclasses."""

    def test_negative_timeout_rejected(self):
        """Timeouts cannot be negative."""
        with pytest.raises(ValueError):
            ProcessConfig(timeout_seconds=-1)

    def test_zero_timeout_allowed(self):
        """Zero disables the timeout."""
        assert ProcessConfig(timeout_seconds=0).timeout_seconds == 0

    def test_extension_gets_leading_dot(self):
        """Extensions are normalized to start with a dot."""
        assert ContainerConfig(extension="mkv").extension == ".mkv"

    def test_invalid_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValueError, match="level"):
            LoggingConfig(level="verbose")

    def test_log_level_case_insensitive(self):
        """Log levels are accepted in any case."""
        assert LoggingConfig(level="DEBUG").level == "DEBUG"

    @pytest.mark.parametrize("port", [0, 65536])
    def test_invalid_port(self, port):
        """Ports must be in 1-65535."""
        with pytest.raises(ValueError):
            ServerConfig(port=port)


class TestEnvReader:
    """Tests for EnvReader."""

    def test_get_str(self):
        """Returns the raw string or the default."""
        reader = EnvReader(env={"A": "x"})

        assert reader.get_str("A") == "x"
        assert reader.get_str("B", "d") == "d"

    def test_get_int(self):
        """Parses integers."""
        assert EnvReader(env={"A": "42"}).get_int("A") == 42

    def test_get_int_invalid_returns_default(self):
        """Unparseable integers return the default."""
        assert EnvReader(env={"A": "x"}).get_int("A", 7) == 7

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("1", True), ("YES", True), ("on", True), ("0", False)],
    )
    def test_get_bool(self, value, expected):
        """Parses booleans."""
        assert EnvReader(env={"A": value}).get_bool("A") is expected

    def test_get_path_must_exist(self, tmp_path):
        """Non-existent paths return the default when must_exist is set."""
        reader = EnvReader(env={"A": str(tmp_path / "missing")})

        assert reader.get_path("A") is None
        assert reader.get_path("A", must_exist=False) == tmp_path / "missing"
