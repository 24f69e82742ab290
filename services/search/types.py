"""Types for search aggregation."""

from __future__ import annotations

from dataclasses import dataclass

from services.sources.base import PackageRecord, SourceKind
from services.sources.errors import SourceError


@dataclass(frozen=True, slots=True)
class ResultSet:
    """
    Records found by each source for one search.

    Each sequence keeps the order its source printed the packages in.
    Records from different sources are never merged.

    Attributes:
        pacman: Records from the sync repositories.
        aur: Records from the AUR.
        flatpak: Records from flatpak remotes.
        errors: Errors of sources that were degraded to no records.
    """

    pacman: tuple[PackageRecord, ...] = ()
    aur: tuple[PackageRecord, ...] = ()
    flatpak: tuple[PackageRecord, ...] = ()
    errors: tuple[SourceError, ...] = ()

    def records_for(self, kind: SourceKind) -> tuple[PackageRecord, ...]:
        """Return the records of one source."""
        records: tuple[PackageRecord, ...] = getattr(self, kind.value)
        return records

    @property
    def counts(self) -> dict[SourceKind, int]:
        """Number of records per source, in report order."""
        return {kind: len(self.records_for(kind)) for kind in SourceKind}

    @property
    def total(self) -> int:
        """Total records across all sources."""
        return sum(self.counts.values())

    @property
    def failed_sources(self) -> list[str]:
        """Sources whose search failed or timed out."""
        return [error.source for error in self.errors]
