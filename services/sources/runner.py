"""Running external package tools."""

from __future__ import annotations

import asyncio
import contextlib
import shutil
from dataclasses import dataclass

from core.logging import get_logger
from core.result import Result, failure, success
from services.sources.errors import InvocationError, SourceError

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """
    Captured result of an external command.

    Attributes:
        returncode: Exit status of the process.
        stdout: Standard output, decoded leniently as UTF-8.
        stderr: Standard error, decoded leniently as UTF-8.
    """

    returncode: int
    stdout: str
    stderr: str = ""


class CommandRunner:
    """
    Spawns external commands without blocking the event loop.

    Only the calling task waits on the process; other searches keep running.
    """

    async def run(self, argv: list[str]) -> CommandOutput:
        """
        Run a command to completion and capture its output.

        If the waiting task is cancelled, the process is killed and reaped
        before the cancellation propagates.

        Args:
            argv: Program and arguments; no shell is involved.

        Returns:
            The captured output. A non-zero exit status is not an error.

        Raises:
            OSError: If the process could not be spawned.
        """
        logger.debug("Running command", argv=argv)
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            logger.debug("Command cancelled", program=argv[0], pid=proc.pid)
            raise
        returncode = proc.returncode if proc.returncode is not None else -1
        logger.debug("Command finished", program=argv[0], returncode=returncode)
        return CommandOutput(
            returncode=returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

    def locate(self, tool: str) -> str | None:
        """
        Find an installed tool on PATH.

        Returns:
            The tool's full path, or None when it is not installed.
        """
        return shutil.which(tool)


async def run_tool(
    runner: CommandRunner,
    source: str,
    argv: list[str],
) -> Result[CommandOutput, SourceError]:
    """
    Run a source's command, turning spawn failures into a SourceError.

    Args:
        runner: Runner used to spawn the process.
        source: Name of the source, for error reporting.
        argv: Program and arguments.

    Returns:
        Result containing the captured output or an invocation error.
    """
    try:
        output = await runner.run(argv)
    except OSError as e:
        logger.debug("Command could not be started", source=source, argv=argv, error=str(e))
        return failure(InvocationError(source, argv[0], details=str(e)))
    return success(output)
