"""Argument parsing for the linkcopy CLI."""

import argparse
from collections.abc import Sequence
from pathlib import Path

from linkcopy import __version__


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="linkcopy",
        description=(
            "Watch the clipboard and turn a URL copied twice in a row into a "
            "link titled with the page's <title>."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        metavar="PATH",
        help="Config file to load instead of ~/.linkcopy/config.json + ./.linkcopy/config.json",
    )
    parser.add_argument(
        "--interval",
        type=float,
        metavar="SECONDS",
        help="Clipboard polling interval (default from config: 0.25)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Title fetch timeout (default from config: 10)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        metavar="N",
        help="Number of history entries to keep (default from config: 50)",
    )
    parser.add_argument(
        "--no-convert",
        dest="convert",
        action="store_false",
        default=None,
        help="Only record history, never convert URLs",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress success/warning notifications",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show INFO-level log messages on the console",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        metavar="PATH",
        help="Directory for linkcopy.log (default: ~/.linkcopy/logs)",
    )
    return parser.parse_args(argv)
