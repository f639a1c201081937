"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading and parsing environment
variables with type conversion. It accepts an optional env mapping so tests
can inject values without touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"MKVPROPS_SERVER_PORT": "9000"})
        port = reader.get_int("MKVPROPS_SERVER_PORT", 8331)  # Returns 9000
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from an environment variable."""
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer from an environment variable.

        Logs a warning and returns the default if the value cannot be parsed.
        """
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from an environment variable.

        "true", "1", "yes" and "on" (case-insensitive) are true; any other
        value is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a path from an environment variable.

        Args:
            var: Environment variable name.
            must_exist: If True, warn and return the default when the path
                does not exist.
            default: Default value if not set.

        Returns:
            Expanded Path, or default.
        """
        value = self._env.get(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
