"""Rendering of search results as a colorized text report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from services.sources.base import SourceKind

if TYPE_CHECKING:
    from services.search.types import ResultSet
    from services.sources.base import PackageRecord

# SGR sequences, passed through to the pager with -R
BOLD = "\x1b[1m"
BLUE = "\x1b[34m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
RESET = "\x1b[0m"

SOURCE_COLORS = {
    SourceKind.PACMAN: BLUE,
    SourceKind.AUR: RED,
    SourceKind.FLATPAK: GREEN,
}

HEADING_SUFFIX = " Results:"


@dataclass(frozen=True, slots=True)
class Section:
    """
    One source's block in the report.

    Attributes:
        label: Display label of the source.
        color: SGR sequence used for package names.
        records: Records to list, in source order.
    """

    label: str
    color: str
    records: tuple[PackageRecord, ...]

    def lines(self) -> list[str]:
        """Render the section as lines."""
        heading = f"{self.label}{HEADING_SUFFIX}"
        out = [f"{BOLD}{heading}{RESET}", "=" * len(heading)]
        for record in self.records:
            out.append(f"{BOLD}{self.color}{record.name}{RESET}")
            out.append(f"  {record.description}")
            out.append(f"  {BOLD}Version:{RESET} {record.version}")
            out.append("")
        return out


def format_package_count(count: int) -> str:
    """Return "1 package" or "N packages"."""
    if count == 1:
        return "1 package"
    return f"{count} packages"


def build_sections(result_set: ResultSet) -> list[Section]:
    """Return sections for the sources that found something, in report order."""
    return [
        Section(
            label=kind.label,
            color=SOURCE_COLORS[kind],
            records=result_set.records_for(kind),
        )
        for kind in SourceKind
        if result_set.records_for(kind)
    ]


def render_summary(result_set: ResultSet) -> str:
    """Render the one-line per-source count summary."""
    return " | ".join(
        f"{BOLD}{kind.label}:{RESET} {format_package_count(count)}"
        for kind, count in result_set.counts.items()
    )


def render_report(result_set: ResultSet) -> str:
    """
    Render the full report.

    The summary line comes first, followed by a blank line and one section
    per source with at least one record. Every line ends with a newline.

    Args:
        result_set: Aggregated search results.

    Returns:
        The report text, including SGR color sequences.
    """
    lines = [render_summary(result_set), ""]
    for section in build_sections(result_set):
        lines.extend(section.lines())
    return "\n".join(lines) + "\n"


def count_lines(text: str) -> int:
    """Count display lines; a trailing newline does not start a new line."""
    return len(text.splitlines())
