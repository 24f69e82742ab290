"""Report rendering and presentation package."""

from services.display.presenter import Pager, Presenter, terminal_height
from services.display.report import render_report

__all__ = [
    "Pager",
    "Presenter",
    "render_report",
    "terminal_height",
]
