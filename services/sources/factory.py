"""Factory for the default set of package sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from services.sources.aur import AurSource
from services.sources.flatpak import FlatpakSource
from services.sources.pacman import PacmanSource
from services.sources.runner import CommandRunner

if TYPE_CHECKING:
    from core.config import Settings
    from services.sources.base import PackageSource


def create_sources(
    settings: Settings,
    runner: CommandRunner | None = None,
) -> tuple[PackageSource, ...]:
    """
    Build the pacman, AUR and flatpak sources.

    Args:
        settings: Application settings (AUR helper preference).
        runner: Optional runner shared by all sources.

    Returns:
        The sources in report order.
    """
    runner = runner or CommandRunner()
    return (
        PacmanSource(runner),
        AurSource(runner, helpers=settings.aur_helpers),
        FlatpakSource(runner),
    )
