"""
Pytest configuration and fixtures for the test suite.

This module contains shared fixtures used across all tests.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from core.config import get_settings
from services.sources.runner import CommandOutput, CommandRunner


@pytest.fixture()
def runner() -> MagicMock:
    """Create a runner that finds every tool and returns empty output."""
    mock = MagicMock(spec=CommandRunner)
    mock.locate.side_effect = lambda tool: f"/usr/bin/{tool}"
    mock.run = AsyncMock(return_value=CommandOutput(returncode=0, stdout=""))
    return mock


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop logging configuration bound to a test's captured streams."""
    yield
    structlog.reset_defaults()


SLOW_TOOL = """#!/bin/sh
echo $$ > "$(dirname "$0")/pid"
exec sleep 30
"""


@pytest.fixture()
def slow_pacman(tmp_path: Path) -> Path:
    """Create a pacman that records its pid and never answers in time."""
    tool = tmp_path / "pacman"
    tool.write_text(SLOW_TOOL)
    tool.chmod(0o755)
    return tool
