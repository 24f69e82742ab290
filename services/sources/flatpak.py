"""Flatpak source, searched through the configured remotes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logging import get_logger
from core.result import Failure, Result, success
from services.sources.base import PackageRecord, SourceKind
from services.sources.normalizer import parse_store_rows
from services.sources.runner import CommandRunner, run_tool

if TYPE_CHECKING:
    from services.sources.errors import SourceError

logger = get_logger(__name__)

SEARCH_COLUMNS = "name,application,version,description"


class FlatpakSource:
    """
    Searches flatpak remotes with ``flatpak search``.

    Rows are re-filtered on the application name, so results only include
    applications whose name contains the search term.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        program: str = "flatpak",
    ) -> None:
        """
        Initialize the flatpak source.

        Args:
            runner: Optional runner, replaced by a fake in tests.
            program: Name or path of the flatpak binary.
        """
        self._runner = runner or CommandRunner()
        self._program = program

    @property
    def kind(self) -> SourceKind:
        """Return the source kind."""
        return SourceKind.FLATPAK

    async def query(
        self,
        term: str,
    ) -> Result[tuple[PackageRecord, ...], SourceError]:
        """Search flatpak remotes for a term."""
        if self._runner.locate(self._program) is None:
            logger.warning("Flatpak not found, Flatpak search disabled", program=self._program)
            return success(())

        argv = [self._program, "search", f"--columns={SEARCH_COLUMNS}", term]
        result = await run_tool(self._runner, self.kind.value, argv)
        if isinstance(result, Failure):
            return result

        stdout = result.value.stdout
        if not stdout:
            return success(())

        records = parse_store_rows(stdout, term)
        logger.debug("Parsed flatpak results", term=term, count=len(records))
        return success(tuple(records))
