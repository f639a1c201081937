"""Tests for core subprocess utilities."""

import asyncio
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from mkvprops.core.subprocess_utils import (
    UNSUPPORTED_EXIT_CODE,
    ProcessResult,
    is_process_execution_supported,
    run_command_async,
)
from mkvprops.exceptions import ProcessTimeoutError

PYTHON = sys.executable

# Writes 140,000 bytes of two-byte characters with no newline
MULTIBYTE_SCRIPT = "import sys; sys.stdout.buffer.write('\\u00e9'.encode() * 70000)"


class TestRunCommandAsync:
    """Tests for run_command_async."""

    @pytest.mark.asyncio
    async def test_successful_command(self):
        """Returns exit code 0 and captured stdout."""
        result = await run_command_async([PYTHON, "-c", "print('hello')"])

        assert result.exit_code == 0
        assert result.stdout == "hello"
        assert result.stderr == ""

    @pytest.mark.asyncio
    async def test_path_arguments_are_converted(self):
        """Path arguments are passed as strings."""
        result = await run_command_async(
            [Path(PYTHON), "-c", "import sys; print(sys.argv[1])", Path("/tmp/x.mkv")]
        )

        assert result.stdout == "/tmp/x.mkv"

    @pytest.mark.asyncio
    async def test_captures_stderr_separately(self):
        """Stderr is captured apart from stdout."""
        result = await run_command_async(
            [PYTHON, "-c", "import sys; print('out'); sys.stderr.write('err\\n')"]
        )

        assert result.stdout == "out"
        assert result.stderr == "err"

    @pytest.mark.asyncio
    async def test_non_zero_exit_code(self):
        """Non-zero exit codes are reported, not raised."""
        result = await run_command_async([PYTHON, "-c", "import sys; sys.exit(5)"])

        assert result.exit_code == 5

    @pytest.mark.asyncio
    async def test_lines_joined_and_trailing_whitespace_trimmed(self):
        """Lines are joined with newlines and trailing whitespace is trimmed."""
        result = await run_command_async(
            [PYTHON, "-c", "print('a'); print('b  '); print(); print()"]
        )

        assert result.stdout == "a\nb"

    @pytest.mark.asyncio
    async def test_large_output_on_both_streams(self):
        """Large output on both pipes does not deadlock."""
        script = (
            "import sys\n"
            "for i in range(20000):\n"
            "    sys.stdout.write('o%d\\n' % i)\n"
            "    sys.stderr.write('e%d\\n' % i)\n"
        )
        result = await run_command_async([PYTHON, "-c", script], timeout=60)

        assert result.exit_code == 0
        assert len(result.stdout.splitlines()) == 20000
        assert len(result.stderr.splitlines()) == 20000

    @pytest.mark.asyncio
    async def test_line_longer_than_reader_limit(self):
        """A single line far beyond the stream reader limit is captured whole."""
        result = await run_command_async(
            [PYTHON, "-c", "print('a' * 150_000); print('tail')"], timeout=60
        )

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["a" * 150_000, "tail"]

    @pytest.mark.asyncio
    async def test_multibyte_characters_across_chunks(self):
        """Multibyte characters split across reads decode intact."""
        result = await run_command_async(
            [PYTHON, "-c", MULTIBYTE_SCRIPT],
            timeout=60,
        )

        assert result.stdout == "é" * 70_000

    @pytest.mark.asyncio
    async def test_process_reaped_when_reading_fails(self):
        """The child is killed and reaped when output collection raises."""
        spawned = []
        real_exec = asyncio.create_subprocess_exec

        async def spawn(*args, **kwargs):
            process = await real_exec(*args, **kwargs)
            spawned.append(process)
            return process

        with (
            patch(
                "mkvprops.core.subprocess_utils.asyncio.create_subprocess_exec",
                side_effect=spawn,
            ),
            patch(
                "mkvprops.core.subprocess_utils._collect_lines",
                side_effect=RuntimeError("read failed"),
            ),
        ):
            with pytest.raises(RuntimeError, match="read failed"):
                await run_command_async(
                    [PYTHON, "-c", "import time; time.sleep(30)"], timeout=60
                )

        assert spawned[0].returncode is not None

    @pytest.mark.asyncio
    async def test_timeout_raises_and_kills(self):
        """A command exceeding the timeout raises ProcessTimeoutError."""
        with pytest.raises(ProcessTimeoutError) as exc_info:
            await run_command_async(
                [PYTHON, "-c", "import time; time.sleep(30)"], timeout=0.5
            )

        assert exc_info.value.timeout == 0.5
        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_executable_raises(self, tmp_path):
        """A missing executable raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await run_command_async([tmp_path / "no-such-tool"])

    @pytest.mark.asyncio
    async def test_unsupported_platform_returns_sentinel(self):
        """Unsupported platforms return exit code -1 without spawning."""
        with (
            patch("mkvprops.core.subprocess_utils.sys.platform", "emscripten"),
            patch(
                "mkvprops.core.subprocess_utils.asyncio.create_subprocess_exec"
            ) as mock_exec,
        ):
            result = await run_command_async(["mkvpropedit", "--version"])

        mock_exec.assert_not_called()
        assert result.exit_code == UNSUPPORTED_EXIT_CODE
        assert result.stdout == ""
        assert "not supported" in result.stderr


class TestIsProcessExecutionSupported:
    """Tests for is_process_execution_supported."""

    @pytest.mark.parametrize("platform", ["ios", "emscripten", "wasi"])
    def test_unsupported_platforms(self, platform):
        """Sandboxed platforms cannot run processes."""
        assert is_process_execution_supported(platform) is False

    @pytest.mark.parametrize("platform", ["linux", "darwin", "win32"])
    def test_supported_platforms(self, platform):
        """Desktop platforms can run processes."""
        assert is_process_execution_supported(platform) is True


class TestProcessResult:
    """Tests for ProcessResult."""

    def test_combined_output_joins_streams(self):
        """combined_output puts stdout before stderr."""
        result = ProcessResult(0, "out", "err")

        assert result.combined_output == "out\nerr"

    def test_combined_output_single_stream(self):
        """combined_output with one empty stream returns the other."""
        assert ProcessResult(0, "", "err").combined_output == "err"
        assert ProcessResult(0, "out", "").combined_output == "out"
