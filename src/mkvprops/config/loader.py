"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MKVPROPS_*)
3. Config file (~/.mkvprops/config.toml)
4. Default values

Environment variables:
- MKVPROPS_CONFIG_PATH: Path to config file (overrides default location)
- MKVPROPS_MKVPROPEDIT_PATH: Path to mkvpropedit executable
- MKVPROPS_MKVMERGE_PATH: Path to mkvmerge executable
- MKVPROPS_PROCESS_TIMEOUT: Seconds before a tool invocation is killed
- MKVPROPS_LOG_LEVEL: Log level (debug, info, warning, error)
- MKVPROPS_LOG_FORMAT: Log format (text, json)
- MKVPROPS_LOG_FILE: Log file path
- MKVPROPS_SERVER_BIND: Address for `mkvprops serve`
- MKVPROPS_SERVER_PORT: Port for `mkvprops serve`
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from mkvprops.config.env import EnvReader
from mkvprops.config.models import (
    ContainerConfig,
    LoggingConfig,
    MkvPropsConfig,
    ProcessConfig,
    ServerConfig,
    ToolPathsConfig,
)
from mkvprops.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mkvprops"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the config file path, honoring MKVPROPS_CONFIG_PATH."""
    env_path = os.environ.get("MKVPROPS_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses the default location.
        strict: If True, raise ConfigError on parse failures.
            If False (default), log a warning and return an empty dict.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        if strict:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e
        logger.warning("Failed to parse config file %s: %s", path, e)
        return {}


def _optional_path(value: Any) -> Path | None:
    if value in (None, ""):
        return None
    return Path(str(value)).expanduser()


def _pick(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    mkvpropedit_path: Path | None = None,
    mkvmerge_path: Path | None = None,
    timeout_seconds: int | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MkvPropsConfig:
    """Get mkvprops configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MKVPROPS_CONFIG_PATH).
        mkvpropedit_path: CLI override for mkvpropedit path.
        mkvmerge_path: CLI override for mkvmerge path.
        timeout_seconds: CLI override for the process timeout.
        log_level: CLI override for log level.
        log_file: CLI override for log file.
        log_format: CLI override for log format.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        MkvPropsConfig with merged configuration.

    Raises:
        ConfigError: If the file cannot be parsed (strict mode) or a merged
            value is invalid.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    tools_file = file_config.get("tools", {})
    process_file = file_config.get("process", {})
    container_file = file_config.get("container", {})
    logging_file = file_config.get("logging", {})
    server_file = file_config.get("server", {})

    defaults = MkvPropsConfig()

    try:
        tools = ToolPathsConfig(
            mkvpropedit=_pick(
                mkvpropedit_path,
                reader.get_path("MKVPROPS_MKVPROPEDIT_PATH"),
                _optional_path(tools_file.get("mkvpropedit")),
            ),
            mkvmerge=_pick(
                mkvmerge_path,
                reader.get_path("MKVPROPS_MKVMERGE_PATH"),
                _optional_path(tools_file.get("mkvmerge")),
            ),
        )
        process = ProcessConfig(
            timeout_seconds=int(
                _pick(
                    timeout_seconds,
                    reader.get_int("MKVPROPS_PROCESS_TIMEOUT"),
                    process_file.get("timeout_seconds"),
                    defaults.process.timeout_seconds,
                )
            ),
        )
        container = ContainerConfig(
            extension=str(
                container_file.get("extension", defaults.container.extension)
            ),
        )
        logging_config = LoggingConfig(
            level=_pick(
                log_level,
                reader.get_str("MKVPROPS_LOG_LEVEL"),
                logging_file.get("level"),
                defaults.logging.level,
            ),
            format=_pick(
                log_format,
                reader.get_str("MKVPROPS_LOG_FORMAT"),
                logging_file.get("format"),
                defaults.logging.format,
            ),
            file=_pick(
                log_file,
                reader.get_path("MKVPROPS_LOG_FILE", must_exist=False),
                _optional_path(logging_file.get("file")),
            ),
            include_stderr=bool(
                logging_file.get("include_stderr", defaults.logging.include_stderr)
            ),
            max_bytes=int(logging_file.get("max_bytes", defaults.logging.max_bytes)),
            backup_count=int(
                logging_file.get("backup_count", defaults.logging.backup_count)
            ),
        )
        server = ServerConfig(
            bind=_pick(
                reader.get_str("MKVPROPS_SERVER_BIND"),
                server_file.get("bind"),
                defaults.server.bind,
            ),
            port=int(
                _pick(
                    reader.get_int("MKVPROPS_SERVER_PORT"),
                    server_file.get("port"),
                    defaults.server.port,
                )
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return MkvPropsConfig(
        tools=tools,
        process=process,
        container=container,
        logging=logging_config,
        server=server,
    )
