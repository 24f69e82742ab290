"""AUR source, searched through an installed AUR helper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logging import get_logger
from core.result import Failure, Result, success
from services.sources.base import PackageRecord, SourceKind
from services.sources.normalizer import parse_repo_listing
from services.sources.runner import CommandRunner, run_tool

if TYPE_CHECKING:
    from collections.abc import Sequence

    from services.sources.errors import SourceError

logger = get_logger(__name__)

DEFAULT_HELPERS: tuple[str, ...] = ("paru", "yay")


class AurSource:
    """
    Searches the AUR with the first available helper.

    Helpers are optional: when none is installed the source reports no
    packages and logs a warning instead of failing.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        helpers: Sequence[str] = DEFAULT_HELPERS,
    ) -> None:
        """
        Initialize the AUR source.

        Args:
            runner: Optional runner, replaced by a fake in tests.
            helpers: Helper programs to probe, most preferred first.
        """
        self._runner = runner or CommandRunner()
        self._helpers = tuple(helpers)

    @property
    def kind(self) -> SourceKind:
        """Return the source kind."""
        return SourceKind.AUR

    def find_helper(self) -> str | None:
        """Return the first installed helper, or None."""
        for helper in self._helpers:
            if self._runner.locate(helper) is not None:
                return helper
        return None

    async def query(
        self,
        term: str,
    ) -> Result[tuple[PackageRecord, ...], SourceError]:
        """Search the AUR for a term."""
        helper = self.find_helper()
        if helper is None:
            logger.warning(
                "No AUR helper found, AUR search disabled",
                tried=list(self._helpers),
            )
            return success(())

        result = await run_tool(self._runner, self.kind.value, [helper, "-Ss", "--aur", term])
        if isinstance(result, Failure):
            return result

        stdout = result.value.stdout
        if not stdout:
            return success(())

        records = parse_repo_listing(stdout, namespace="aur")
        logger.debug("Parsed AUR results", helper=helper, term=term, count=len(records))
        return success(tuple(records))
