"""Aggregator for concurrent searches across package sources."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from core.logging import get_logger
from core.result import Failure
from services.search.types import ResultSet
from services.sources.base import SourceKind
from services.sources.errors import SearchTimeoutError, SourceError, TaskCrashedError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from core.result import Result
    from services.sources.base import PackageRecord, PackageSource

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 5.0

type SourceOutcome = tuple[tuple[PackageRecord, ...], SourceError | None]


class AggregationError(Exception):
    """The searches could not be started at all."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize error."""
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """Return the message, with details when present."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class Aggregator:
    """
    Searches all package sources concurrently.

    Every source runs in its own task with its own time bound. A source that
    fails, raises or times out contributes no records and a warning; it never
    affects the other sources or the overall search.
    """

    def __init__(
        self,
        sources: Iterable[PackageSource],
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            sources: Sources to search, at most one per kind.
            timeout: Seconds to wait for each source.
        """
        self._sources: dict[SourceKind, PackageSource] = {
            source.kind: source for source in sources
        }
        self._timeout = timeout

    async def aggregate(self, term: str) -> ResultSet:
        """
        Search every source for a term.

        Args:
            term: Free-text search term.

        Returns:
            Records per source; empty for sources that were degraded.

        Raises:
            AggregationError: If the search tasks could not be started.
        """
        tasks: dict[SourceKind, asyncio.Task[Result[tuple[PackageRecord, ...], SourceError]]] = {}
        try:
            for kind, source in self._sources.items():
                tasks[kind] = asyncio.create_task(
                    source.query(term),
                    name=f"search-{kind.value}",
                )
        except (RuntimeError, OSError) as e:
            for task in tasks.values():
                task.cancel()
            raise AggregationError("Failed to start searches", details=str(e)) from e

        outcomes = await asyncio.gather(
            *(self._collect(kind, task) for kind, task in tasks.items())
        )

        records: dict[SourceKind, tuple[PackageRecord, ...]] = {}
        errors: list[SourceError] = []
        for kind, (found, error) in zip(tasks, outcomes, strict=True):
            records[kind] = found
            if error is not None:
                errors.append(error)

        result_set = ResultSet(
            pacman=records.get(SourceKind.PACMAN, ()),
            aur=records.get(SourceKind.AUR, ()),
            flatpak=records.get(SourceKind.FLATPAK, ()),
            errors=tuple(errors),
        )

        logger.info(
            "Search completed",
            term=term,
            total=result_set.total,
            **{kind.value: count for kind, count in result_set.counts.items()},
            failed=result_set.failed_sources,
        )

        return result_set

    async def _collect(
        self,
        kind: SourceKind,
        task: asyncio.Task[Result[tuple[PackageRecord, ...], SourceError]],
    ) -> SourceOutcome:
        """Wait for one source and resolve its outcome, never raising."""
        try:
            result = await asyncio.wait_for(task, timeout=self._timeout)
        except TimeoutError:
            # wait_for cancels the task, which kills the spawned process.
            logger.warning(
                "Search timed out",
                source=kind.label,
                timeout=self._timeout,
            )
            return (), SearchTimeoutError(kind.value, self._timeout)
        except Exception as e:
            logger.warning(
                "Search task failed",
                source=kind.label,
                error=str(e) or type(e).__name__,
            )
            return (), TaskCrashedError(kind.value, details=str(e) or type(e).__name__)

        if isinstance(result, Failure):
            logger.warning(
                "Search failed",
                source=kind.label,
                error=str(result.error),
            )
            return (), result.error

        return tuple(result.value), None
