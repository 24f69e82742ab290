"""
Normalization of raw source output into package records.

Two output shapes are understood:

* Repository listings, as printed by ``pacman -Ss`` and AUR helpers::

      core/bash 5.2.15-1 (base)
          The GNU Bourne Again shell

  A header line ``repo/name version`` followed by one description line.

* Store rows, as printed by ``flatpak search --columns=...``: one header row,
  then tab-separated ``name, application id, version, description`` rows.

Malformed lines are skipped one record at a time; they never abort parsing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logging import get_logger
from services.sources.base import UNKNOWN_VERSION, PackageRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)

STORE_MIN_FIELDS = 4


def extract_version(field: str) -> str:
    """
    Pick the version out of the text following a package name.

    A parenthesized substring wins when the first ``(`` comes before the first
    ``)``; otherwise the whole field is used as is.

    Args:
        field: Everything after the package name on a header line.

    Returns:
        The version, or "Unknown" when nothing usable is left.
    """
    field = field.strip()
    start = field.find("(")
    end = field.find(")")
    if start != -1 and end != -1 and start < end:
        version = field[start + 1 : end].strip()
    else:
        version = field
    return version or UNKNOWN_VERSION


def _split_header(line: str, marker: str) -> tuple[str, str] | None:
    """Split a ``repo/name version`` line into name and version field."""
    if marker not in line:
        return None
    _, _, rest = line.partition("/")
    name, sep, version_field = rest.partition(" ")
    name = name.strip()
    if not sep or not name:
        return None
    return name, version_field


def parse_repo_listing(text: str, namespace: str | None = None) -> list[PackageRecord]:
    """
    Parse a repository listing into records.

    Args:
        text: Raw stdout of the listing command.
        namespace: Only accept header lines containing ``"<namespace>/"``.
            Any line containing ``/`` is a candidate when omitted.

    Returns:
        Records in the order they appear in the listing.
    """
    marker = f"{namespace}/" if namespace else "/"
    records: list[PackageRecord] = []
    lines: Iterator[str] = iter(text.splitlines())

    for line in lines:
        header = _split_header(line, marker)
        if header is None:
            if line.strip():
                logger.debug("Skipping non-record line", line=line)
            continue

        name, version_field = header
        description = next(lines, None)
        records.append(
            PackageRecord.create(
                name=name,
                version=extract_version(version_field),
                description=description,
            )
        )

    return records


def parse_store_rows(text: str, term: str) -> list[PackageRecord]:
    """
    Parse tab-separated store rows into records.

    The first row is a header and is always skipped. Rows are kept only when
    the display name contains the term, ignoring case. Ids and descriptions are
    not considered.

    Args:
        text: Raw stdout of the store search command.
        term: The search term used for re-filtering.

    Returns:
        Matching records in row order.
    """
    needle = term.lower()
    records: list[PackageRecord] = []

    for row in text.splitlines()[1:]:
        if not row:
            continue

        fields = row.split("\t")
        if len(fields) < STORE_MIN_FIELDS:
            logger.debug("Skipping short store row", row=row, fields=len(fields))
            continue

        name, app_id, version, description = (f.strip() for f in fields[:STORE_MIN_FIELDS])
        if needle not in name.lower():
            continue

        records.append(
            PackageRecord.create(
                name=f"{name} ({app_id})",
                version=version,
                description=description,
            )
        )

    return records
