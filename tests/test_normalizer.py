"""Tests for normalizing raw source output."""

from __future__ import annotations

import pytest

from services.sources.base import PackageRecord
from services.sources.normalizer import extract_version, parse_repo_listing, parse_store_rows
from tests.samples import AUR_OUTPUT, FLATPAK_OUTPUT, PACMAN_OUTPUT


class TestExtractVersion:
    """Tests for extract_version."""

    def test_plain_version_used_verbatim(self) -> None:
        """A field without parentheses is used as is."""
        assert extract_version("5.2.15-1") == "5.2.15-1"

    def test_parenthesized_version_wins(self) -> None:
        """The parenthesized substring replaces the positional version."""
        assert extract_version("5.2.15-1 (shell)") == "shell"

    def test_leading_parentheses(self) -> None:
        """A field that is only parenthesized yields its interior."""
        assert extract_version("(1.2.3)") == "1.2.3"

    def test_malformed_parentheses_used_verbatim(self) -> None:
        """A closing paren before the opening one keeps the whole field."""
        assert extract_version("1.0) x (") == "1.0) x ("

    def test_unclosed_parenthesis_used_verbatim(self) -> None:
        """An opening paren without a closing one keeps the whole field."""
        assert extract_version("1.0 (beta") == "1.0 (beta"

    def test_trailing_status_kept(self) -> None:
        """Installed markers stay part of a plain version."""
        assert extract_version("2.11-3 [installed]") == "2.11-3 [installed]"

    @pytest.mark.parametrize("field", ["", "   ", "()"])
    def test_empty_version_is_unknown(self, field: str) -> None:
        """Nothing usable yields Unknown."""
        assert extract_version(field) == "Unknown"


class TestParseRepoListing:
    """Tests for parse_repo_listing."""

    def test_parses_every_block(self) -> None:
        """Each header and description pair becomes one record, in order."""
        records = parse_repo_listing(PACMAN_OUTPUT)

        assert records == [
            PackageRecord("bash", "base", "The GNU Bourne Again shell"),
            PackageRecord(
                "bash-completion",
                "2.11-3",
                "Programmable completion for the bash shell",
            ),
        ]

    def test_documented_parenthesized_example(self) -> None:
        """The parenthesized group overrides the positional version."""
        records = parse_repo_listing(
            "core/bash 5.2.15-1 (shell)\n    The GNU Bourne Again shell\n"
        )

        assert records == [PackageRecord("bash", "shell", "The GNU Bourne Again shell")]

    def test_missing_description_line(self) -> None:
        """A header on the last line gets the default description."""
        records = parse_repo_listing("extra/vim 9.0-1")

        assert records == [PackageRecord("vim", "9.0-1", "No description.")]

    def test_blank_description_line(self) -> None:
        """A blank description line gets the default description."""
        records = parse_repo_listing("extra/vim 9.0-1\n    \nextra/gvim 9.0-1\n    GUI vim\n")

        assert records[0].description == "No description."
        assert records[1] == PackageRecord("gvim", "9.0-1", "GUI vim")

    def test_description_line_is_always_consumed(self) -> None:
        """The line after a header is its description, even if it has a slash."""
        records = parse_repo_listing("extra/a 1.0\nextra/b 2.0\n")

        assert records == [PackageRecord("a", "1.0", "extra/b 2.0")]

    def test_lines_without_slash_are_skipped(self) -> None:
        """Noise lines never become records."""
        records = parse_repo_listing(":: Synchronizing\nextra/vim 9.0-1\n    Editor\n")

        assert [r.name for r in records] == ["vim"]

    def test_header_without_version_is_skipped(self) -> None:
        """A slash line without a space after the name is not a record."""
        records = parse_repo_listing("extra/vim\nextra/nano 7.2-1\n    Editor\n")

        assert records == [PackageRecord("nano", "7.2-1", "Editor")]

    def test_header_with_empty_name_is_skipped(self) -> None:
        """A slash line with nothing before the space is not a record."""
        records = parse_repo_listing("extra/ 1.0\nextra/nano 7.2-1\n    Editor\n")

        assert [r.name for r in records] == ["nano"]

    def test_empty_text(self) -> None:
        """No output means no records."""
        assert parse_repo_listing("") == []

    def test_namespace_filters_headers(self) -> None:
        """Only lines with the namespace prefix are records."""
        text = "extra/bash 5.2-1\n    Shell\n" + AUR_OUTPUT

        records = parse_repo_listing(text, namespace="aur")

        assert [r.name for r in records] == ["bash-git", "bashtop"]
        assert records[0].version == "5.2.r15.g1234-1 [+3 ~0.00]"
        assert records[1].version == "Orphaned"


class TestParseStoreRows:
    """Tests for parse_store_rows."""

    def test_header_is_skipped(self) -> None:
        """The first row never becomes a record, even when it matches."""
        records = parse_store_rows("Name\tApplication ID\tVersion\tDescription\n", "name")

        assert records == []

    def test_filters_on_display_name(self) -> None:
        """Only rows whose name contains the term are kept."""
        records = parse_store_rows(FLATPAK_OUTPUT, "gimp")

        assert records == [
            PackageRecord(
                "GIMP (org.gimp.GIMP)",
                "2.10.34",
                "Create images and edit photographs",
            )
        ]

    def test_filter_ignores_case(self) -> None:
        """Matching is case-insensitive on both sides."""
        records = parse_store_rows(FLATPAK_OUTPUT, "InKs")

        assert [r.name for r in records] == ["Inkscape (org.inkscape.Inkscape)"]

    def test_filter_ignores_description_and_id(self) -> None:
        """A term only found in the description or id does not match."""
        assert parse_store_rows(FLATPAK_OUTPUT, "photographs") == []
        assert parse_store_rows(FLATPAK_OUTPUT, "org.") == []

    def test_empty_fields_get_defaults(self) -> None:
        """Empty version and description fall back to defaults."""
        records = parse_store_rows(FLATPAK_OUTPUT, "krita")

        assert records == [PackageRecord("Krita (org.kde.krita)", "Unknown", "No description.")]

    def test_short_rows_are_skipped(self) -> None:
        """Rows with fewer than four fields are ignored."""
        text = "header\nGIMP\torg.gimp.GIMP\t2.10\nGIMP Extra\tx.y\t1\td\n"

        records = parse_store_rows(text, "gimp")

        assert [r.name for r in records] == ["GIMP Extra (x.y)"]

    def test_fields_are_trimmed(self) -> None:
        """Whitespace around fields is removed."""
        text = "header\n GIMP \t org.gimp.GIMP \t 2.10 \t Editor \n"

        records = parse_store_rows(text, "gimp")

        assert records == [PackageRecord("GIMP (org.gimp.GIMP)", "2.10", "Editor")]
