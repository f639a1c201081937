"""Configuration data models.

This module defines dataclasses for mkvprops configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

_VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
_VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    mkvpropedit: Path | None = None
    mkvmerge: Path | None = None


@dataclass
class ProcessConfig:
    """Configuration for external process execution."""

    # Seconds before a tool invocation is killed (0 = wait indefinitely)
    timeout_seconds: int = 300

    def __post_init__(self) -> None:
        if self.timeout_seconds < 0:
            raise ValueError(
                f"timeout_seconds must be >= 0, got {self.timeout_seconds}"
            )


@dataclass
class ContainerConfig:
    """Configuration for accepted container files."""

    # Extension a file must carry to be accepted (compared case-insensitively)
    extension: str = ".mkv"

    def __post_init__(self) -> None:
        if not self.extension.startswith("."):
            self.extension = f".{self.extension}"


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "info"
    format: str = "text"
    file: Path | None = None
    include_stderr: bool = True
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.casefold() not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(_VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.casefold() not in _VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(_VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )


@dataclass
class ServerConfig:
    """Configuration for the HTTP JSON boundary."""

    bind: str = "127.0.0.1"
    port: int = 8331

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")


@dataclass
class MkvPropsConfig:
    """Top-level mkvprops configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)
    container: ContainerConfig = field(default_factory=ContainerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
