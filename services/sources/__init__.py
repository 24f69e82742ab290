"""Package sources package."""

from services.sources.aur import AurSource
from services.sources.base import PackageRecord, PackageSource, SourceKind
from services.sources.errors import ErrorCode, SourceError
from services.sources.factory import create_sources
from services.sources.flatpak import FlatpakSource
from services.sources.pacman import PacmanSource
from services.sources.runner import CommandOutput, CommandRunner

__all__ = [
    "AurSource",
    "CommandOutput",
    "CommandRunner",
    "ErrorCode",
    "FlatpakSource",
    "PackageRecord",
    "PackageSource",
    "PacmanSource",
    "SourceError",
    "SourceKind",
    "create_sources",
]
