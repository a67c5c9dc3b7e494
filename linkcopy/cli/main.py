"""Entry point for the linkcopy CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from linkcopy.cli.arg_parser import parse_args
from linkcopy.cli.bootstrap import build_monitor, configure_logging
from linkcopy.config.loader import load_config, merge_layers
from linkcopy.config.schema import Config
from linkcopy.core.constants import get_log_dir
from linkcopy.core.errors import ConfigError
from linkcopy.display.console import get_console
from linkcopy.display.history import HistoryPrinter, render_history_table

logger = logging.getLogger(__name__)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Overlay command line options on the loaded config.

    Raises:
        ConfigError: If an override produces an invalid config.
    """
    overrides: dict[str, Any] = {}
    if args.interval is not None:
        overrides.setdefault("polling", {})["interval"] = args.interval
    if args.timeout is not None:
        overrides.setdefault("fetch", {})["timeout"] = args.timeout
    if args.capacity is not None:
        overrides.setdefault("history", {})["capacity"] = args.capacity
    if args.convert is not None:
        overrides.setdefault("conversion", {})["enabled"] = args.convert
    if args.quiet:
        overrides.setdefault("notifications", {})["enabled"] = False

    if not overrides:
        return config

    try:
        return Config.model_validate(merge_layers(config.model_dump(), overrides))
    except ValidationError as e:
        raise ConfigError(f"Invalid command line option: {e}") from e


async def run_monitor(config: Config) -> None:
    """Watch the clipboard until cancelled (Ctrl+C)."""
    console = get_console()
    monitor, transport = build_monitor(config)
    unsubscribe = monitor.history.subscribe(HistoryPrinter(console))

    monitor.start()
    console.print(
        "[bold]linkcopy[/] watching the clipboard. "
        "Copy a URL twice to turn it into a titled link. Ctrl+C to quit."
    )
    try:
        await asyncio.Event().wait()
    finally:
        monitor.stop()
        if monitor.in_flight:
            logger.info("Waiting for %d conversion(s) to finish", monitor.in_flight)
        await monitor.drain()
        await transport.aclose()
        unsubscribe()
        if len(monitor.history):
            console.print(render_history_table(monitor.history.items))


def main() -> None:
    """Entry point for the linkcopy CLI."""
    args = parse_args()
    log_dir = args.log_dir or get_log_dir()
    configure_logging(
        log_dir,
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )

    console = get_console()
    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        console.print(f"[red]Config error:[/] {escape(e.message)}")
        raise SystemExit(1) from e

    try:
        asyncio.run(run_monitor(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
