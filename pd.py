#!/usr/bin/env python
"""Search pacman, the AUR and flatpak for packages in one go."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from core.config import get_settings
from core.logging import bind_context, clear_context, configure_logging, get_logger
from services.display import Pager, Presenter, terminal_height
from services.display.report import BOLD, RED, RESET
from services.search import AggregationError, Aggregator
from services.sources import create_sources

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

USAGE = f"{BOLD}Usage:{RESET} pd <search-term>"

FLAG_OPTIONS = frozenset({"-h", "--help", "--no-pager"})
VALUE_OPTIONS = frozenset({"--timeout", "--log-level"})


def positive_float(value: str) -> float:
    """Parse a strictly positive number of seconds."""
    try:
        number = float(value)
    except ValueError:
        msg = f"invalid number: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number <= 0:
        msg = "must be greater than zero"
        raise argparse.ArgumentTypeError(msg)
    return number


def split_arguments(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """
    Separate pd's own options from the words of the search term.

    Any argument that is not one of pd's options is a search word, including
    words that start with a dash such as ``-git``. ``--`` ends option
    processing.

    Returns:
        The option arguments and the search words, each in command line order.
    """
    options: list[str] = []
    words: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            words.extend(args)
        elif arg in FLAG_OPTIONS:
            options.append(arg)
        elif arg.partition("=")[0] in VALUE_OPTIONS and "=" in arg:
            options.append(arg)
        elif arg in VALUE_OPTIONS:
            options.append(arg)
            value = next(args, None)
            if value is not None:
                options.append(value)
        else:
            words.append(arg)
    return options, words


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="pd",
        description="Search pacman, the AUR and flatpak for packages.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "term",
        nargs="*",
        help="search term; words are joined with spaces, leading dashes included",
    )
    parser.add_argument(
        "--no-pager",
        action="store_true",
        help="always print directly, even when the output is long",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=None,
        help="seconds to wait for each source (default: 5)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="minimum level of diagnostics written to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run a search and display the results.

    Returns:
        Process exit code: 0 on success, 1 on usage or fatal errors.
    """
    options, words = split_arguments(sys.argv[1:] if argv is None else argv)
    if words:
        options = [*options, "--", *words]
    args = build_parser().parse_args(options)
    if not args.term:
        print(USAGE, file=sys.stderr)
        return 1

    term = " ".join(args.term)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"{RED}Error:{RESET} Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(
        json_format=settings.json_logs,
        log_level=args.log_level or settings.log_level,
    )
    bind_context(term=term)
    try:
        timeout = args.timeout if args.timeout is not None else settings.timeout
        aggregator = Aggregator(create_sources(settings), timeout=timeout)

        try:
            result_set = asyncio.run(aggregator.aggregate(term))
        except (AggregationError, OSError, RuntimeError) as e:
            logger.debug("Search aborted", error=str(e))
            print(f"{RED}Error:{RESET} Failed to search packages: {e}", file=sys.stderr)
            return 1

        pager = None
        if settings.use_pager and not args.no_pager:
            pager = Pager(settings.pager, settings.pager_args)

        presenter = Presenter(
            pager,
            height_probe=lambda: terminal_height(settings.default_terminal_height),
        )
        presenter.display(result_set)
    finally:
        clear_context()
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
