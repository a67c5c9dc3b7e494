"""Command line interface for linkcopy."""

from linkcopy.cli.main import main

__all__ = ["main"]
