"""Pacman repository source."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logging import get_logger
from core.result import Failure, Result, success
from services.sources.base import PackageRecord, SourceKind
from services.sources.normalizer import parse_repo_listing
from services.sources.runner import CommandRunner, run_tool

if TYPE_CHECKING:
    from services.sources.errors import SourceError

logger = get_logger(__name__)


class PacmanSource:
    """
    Searches the sync repositories with ``pacman -Ss``.

    Pacman is the primary source, so it is not probed first: a missing binary
    surfaces as an invocation error.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        program: str = "pacman",
    ) -> None:
        """
        Initialize the pacman source.

        Args:
            runner: Optional runner, replaced by a fake in tests.
            program: Name or path of the pacman binary.
        """
        self._runner = runner or CommandRunner()
        self._program = program

    @property
    def kind(self) -> SourceKind:
        """Return the source kind."""
        return SourceKind.PACMAN

    async def query(
        self,
        term: str,
    ) -> Result[tuple[PackageRecord, ...], SourceError]:
        """Search the repositories for a term."""
        result = await run_tool(self._runner, self.kind.value, [self._program, "-Ss", term])
        if isinstance(result, Failure):
            return result

        stdout = result.value.stdout
        if not stdout:
            return success(())

        records = parse_repo_listing(stdout)
        logger.debug("Parsed pacman results", term=term, count=len(records))
        return success(tuple(records))
