"""Subprocess utilities for external tool invocation.

This module provides the asynchronous command runner used for every call to
mkvpropedit and mkvmerge: consistent decoding, streamed output capture,
timeout handling, and a distinguished result on platforms that cannot spawn
processes.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from mkvprops.exceptions import ProcessTimeoutError

logger = logging.getLogger(__name__)

# Platforms where subprocess creation is not available
UNSUPPORTED_PLATFORMS: frozenset[str] = frozenset({"ios", "emscripten", "wasi"})

# Exit code reported when the platform cannot run processes
UNSUPPORTED_EXIT_CODE = -1

# Bytes requested from a pipe per read
_READ_CHUNK_SIZE = 65536


@dataclass(frozen=True)
class ProcessResult:
    """Captured result of an external command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def combined_output(self) -> str:
        """Stdout followed by stderr."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


# Signature shared by run_command_async and test doubles
CommandRunner = Callable[..., Awaitable[ProcessResult]]


def is_process_execution_supported(platform: str | None = None) -> bool:
    """Return True if the platform can spawn external processes."""
    return (platform or sys.platform) not in UNSUPPORTED_PLATFORMS


def _decode_line(raw: bytes | bytearray) -> str:
    return bytes(raw).decode("utf-8", errors="replace").rstrip("\r")


async def _collect_lines(stream: asyncio.StreamReader | None) -> list[str]:
    """Read a stream in fixed-size chunks until EOF and split it into lines.

    Lines are cut out of the buffered bytes, so a single line may be longer
    than the stream reader's line limit (mkvmerge -J emits hex-encoded codec
    data on one line).
    """
    lines: list[str] = []
    if stream is None:
        return lines
    pending = bytearray()
    while True:
        chunk = await stream.read(_READ_CHUNK_SIZE)
        if not chunk:
            break
        pending.extend(chunk)
        end = pending.rfind(b"\n")
        if end < 0:
            continue
        lines.extend(_decode_line(raw) for raw in pending[:end].split(b"\n"))
        del pending[: end + 1]
    if pending:
        lines.append(_decode_line(pending))
    return lines


async def run_command_async(
    args: Sequence[str | Path],
    timeout: float | None = None,
) -> ProcessResult:
    """Run an external command and capture its output.

    Stdout and stderr are drained concurrently in fixed-size chunks, so a
    command producing large output cannot block on a full pipe and a single
    line may be of any length. Each stream is split into lines, joined with
    newlines, and trailing whitespace is trimmed once.

    Args:
        args: Command and arguments. Path objects are converted to strings.
            Arguments are passed directly to the executable (no shell).
        timeout: Timeout in seconds. None or 0 waits indefinitely.

    Returns:
        ProcessResult with exit code, stdout and stderr. On platforms without
        process support, exit code is -1 and stderr explains why.

    Raises:
        ProcessTimeoutError: If the command exceeds the timeout. The process
            is killed and reaped before this is raised.
        FileNotFoundError: If the executable does not exist.
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    if not is_process_execution_supported():
        logger.warning(
            "Process execution not supported on %s platform", sys.platform
        )
        return ProcessResult(
            exit_code=UNSUPPORTED_EXIT_CODE,
            stdout="",
            stderr=f"Process execution not supported on {sys.platform}",
        )

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    process = await asyncio.create_subprocess_exec(
        *str_args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    async def _communicate() -> tuple[list[str], list[str], int]:
        stdout_lines, stderr_lines = await asyncio.gather(
            _collect_lines(process.stdout),
            _collect_lines(process.stderr),
        )
        returncode = await process.wait()
        return stdout_lines, stderr_lines, returncode

    try:
        stdout_lines, stderr_lines, returncode = await asyncio.wait_for(
            _communicate(), timeout=timeout or None
        )
    except asyncio.TimeoutError:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise ProcessTimeoutError(command_name, timeout or 0) from None
    finally:
        # Reap the child on every exit path, including cancellation
        if process.returncode is None:
            process.kill()
            await process.wait()

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": returncode,
        },
    )

    return ProcessResult(
        exit_code=returncode,
        stdout="\n".join(stdout_lines).rstrip(),
        stderr="\n".join(stderr_lines).rstrip(),
    )
