"""Base types and protocols for package sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.result import Result
    from services.sources.errors import SourceError

UNKNOWN_VERSION = "Unknown"
NO_DESCRIPTION = "No description."


class SourceKind(str, Enum):
    """
    The package sources that are searched.

    Declaration order is the order sections appear in the report.
    """

    PACMAN = "pacman"
    AUR = "aur"
    FLATPAK = "flatpak"

    @property
    def label(self) -> str:
        """Return the display label for this source."""
        return _LABELS[self]


_LABELS = {
    SourceKind.PACMAN: "Pacman",
    SourceKind.AUR: "AUR",
    SourceKind.FLATPAK: "Flatpak",
}


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """
    One package as reported by a source.

    Attributes:
        name: Display name of the package.
        version: Version string, "Unknown" when the source gave none.
        description: Summary, "No description." when the source gave none.
    """

    name: str
    version: str = UNKNOWN_VERSION
    description: str = NO_DESCRIPTION

    def __post_init__(self) -> None:
        """Validate record fields."""
        if not self.name:
            msg = "name cannot be empty"
            raise ValueError(msg)
        if not self.version:
            msg = "version cannot be empty"
            raise ValueError(msg)
        if not self.description:
            msg = "description cannot be empty"
            raise ValueError(msg)

    @classmethod
    def create(
        cls,
        name: str,
        version: str | None = None,
        description: str | None = None,
    ) -> PackageRecord:
        """
        Build a record, substituting defaults for blank version or description.

        Raises:
            ValueError: If the name is blank.
        """
        version = (version or "").strip()
        description = (description or "").strip()
        return cls(
            name=name.strip(),
            version=version or UNKNOWN_VERSION,
            description=description or NO_DESCRIPTION,
        )


@runtime_checkable
class PackageSource(Protocol):
    """
    Protocol defining the interface for package sources.

    The aggregator depends only on this protocol, never on how a source
    produces its records.
    """

    @property
    def kind(self) -> SourceKind:
        """Return which source this is."""
        ...

    async def query(
        self,
        term: str,
    ) -> Result[tuple[PackageRecord, ...], SourceError]:
        """
        Search the source for packages matching a term.

        Args:
            term: Free-text search term.

        Returns:
            Result containing the records in source order, or SourceError.
        """
        ...
