"""Typed exception hierarchy for linkcopy."""

from __future__ import annotations


class LinkCopyError(Exception):
    """Base class for all linkcopy errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(LinkCopyError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class FetchError(LinkCopyError):
    """Raised when a page request fails at the network layer.

    Timeouts, refused connections and DNS failures end up here. A non-2xx
    status or a page without a title is not a FetchError.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        self.url = url
        super().__init__(message)


class ClipboardWriteError(LinkCopyError):
    """Raised when the host clipboard rejects a write."""
