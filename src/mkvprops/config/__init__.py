"""Configuration for mkvprops."""

from mkvprops.config.env import EnvReader
from mkvprops.config.loader import (
    DEFAULT_CONFIG_FILE,
    get_config,
    get_default_config_path,
    load_config_file,
)
from mkvprops.config.models import (
    ContainerConfig,
    LoggingConfig,
    MkvPropsConfig,
    ProcessConfig,
    ServerConfig,
    ToolPathsConfig,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ContainerConfig",
    "EnvReader",
    "LoggingConfig",
    "MkvPropsConfig",
    "ProcessConfig",
    "ServerConfig",
    "ToolPathsConfig",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
