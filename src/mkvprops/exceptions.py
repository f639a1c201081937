"""Custom exceptions for mkvprops.

Operation-level failures (invalid files, failed edits) are reported through
result objects. These exceptions cover the conditions that are raised:
missing tools at startup, probe failures inside the inspector, process
timeouts, and unusable configuration.
"""


class MkvPropsError(Exception):
    """Base exception for mkvprops errors."""


class ToolNotAvailableError(MkvPropsError):
    """Raised when a required external tool cannot be found.

    Attributes:
        tool_name: Name of the missing tool (e.g. "mkvpropedit").
    """

    def __init__(self, tool_name: str, hint: str = "") -> None:
        self.tool_name = tool_name
        message = f"Required tool not available: {tool_name}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class MediaIntrospectionError(MkvPropsError):
    """Raised when mkvmerge cannot identify a file."""


class ProcessTimeoutError(MkvPropsError):
    """Raised when an external command exceeds its timeout.

    The process has already been killed when this is raised.

    Attributes:
        command: Name of the command that timed out.
        timeout: Timeout in seconds that was exceeded.
    """

    def __init__(self, command: str, timeout: float) -> None:
        self.command = command
        self.timeout = timeout
        super().__init__(f"{command} timed out after {timeout:g}s")


class ConfigError(MkvPropsError):
    """Raised when a configuration file cannot be parsed (strict mode)."""
