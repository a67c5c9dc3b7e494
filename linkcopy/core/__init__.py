"""Core types, interfaces and errors shared by the linkcopy engine."""

from linkcopy.core.errors import (
    ClipboardWriteError,
    ConfigError,
    FetchError,
    LinkCopyError,
)
from linkcopy.core.interfaces import ClipboardDevice, NetworkTransport, Notifier
from linkcopy.core.types import FetchResponse, RichTextLink

__all__ = [
    # Errors
    "LinkCopyError",
    "ConfigError",
    "FetchError",
    "ClipboardWriteError",
    # Interfaces
    "ClipboardDevice",
    "NetworkTransport",
    "Notifier",
    # Types
    "FetchResponse",
    "RichTextLink",
]
