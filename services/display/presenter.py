"""Presentation of the report: direct output or an interactive pager."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import TYPE_CHECKING, TextIO

from core.logging import get_logger
from services.display.report import count_lines, render_report

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from services.search.types import ResultSet

logger = get_logger(__name__)

DEFAULT_TERMINAL_HEIGHT = 24
RESERVED_LINES = 2


def terminal_height(default: int = DEFAULT_TERMINAL_HEIGHT) -> int:
    """
    Return the number of rows of the controlling terminal.

    Args:
        default: Rows assumed when the size cannot be determined.
    """
    rows = shutil.get_terminal_size(fallback=(80, default)).lines
    return rows if rows > 0 else default


class Pager:
    """An external pager fed through its standard input."""

    def __init__(
        self,
        command: str = "less",
        args: Sequence[str] = ("-R", "+Gg"),
    ) -> None:
        """
        Initialize the pager.

        Args:
            command: Pager program.
            args: Arguments; the defaults keep colors and open at the top.
        """
        self._command = command
        self._args = tuple(args)

    @property
    def command(self) -> str:
        """Return the pager program."""
        return self._command

    def available(self) -> bool:
        """Return True if the pager program is installed."""
        return shutil.which(self._command) is not None

    def show(self, text: str) -> None:
        """
        Display text in the pager and wait for the user to quit it.

        Raises:
            OSError: If the pager could not be started.
        """
        subprocess.run(
            [self._command, *self._args],
            input=text,
            text=True,
            check=False,
        )


class Presenter:
    """
    Shows a report, paging it when it does not fit the terminal.

    A report longer than the terminal height minus two lines goes to the
    pager; anything shorter, or everything when no pager is available, is
    written straight to the output stream.
    """

    def __init__(
        self,
        pager: Pager | None = None,
        height_probe: Callable[[], int] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the presenter.

        Args:
            pager: Pager to use for long reports, None to never page.
            height_probe: Returns the terminal height in rows.
            stream: Output stream for direct printing, stdout when omitted.
        """
        self._pager = pager
        self._height_probe = height_probe or terminal_height
        self._stream = stream

    def should_page(self, text: str) -> bool:
        """Return True if the text is too long for the terminal."""
        return count_lines(text) > self._height_probe() - RESERVED_LINES

    def display(self, result_set: ResultSet) -> None:
        """Render and show the results."""
        self.show(render_report(result_set))

    def show(self, text: str) -> None:
        """Show already rendered text."""
        if self._pager is not None and self.should_page(text) and self._pager.available():
            try:
                self._pager.show(text)
                return
            except OSError as e:
                logger.warning("Pager failed to start", pager=self._pager.command, error=str(e))

        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)
        stream.flush()
