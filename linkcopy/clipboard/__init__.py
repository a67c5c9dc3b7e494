"""Clipboard monitoring and link conversion engine."""
from linkcopy.clipboard.classifier import ChangeClassifier, detect_content_type, is_absolute_url
from linkcopy.clipboard.history import HistoryStore
from linkcopy.clipboard.monitor import ClipboardMonitor
from linkcopy.clipboard.poller import ClipboardPoller
from linkcopy.clipboard.state import ChangeTracker, PendingState
from linkcopy.clipboard.system import SystemClipboard
from linkcopy.clipboard.types import (
    HTML_FORMAT,
    RICH_TEXT_FORMATS,
    RTF_FORMAT,
    RTFD_FORMAT,
    TEXT_FORMAT,
    ClipboardItem,
    ContentType,
)
from linkcopy.clipboard.writer import ConversionResult, LinkState, LinkWriter

__all__ = [
    "ChangeClassifier",
    "ChangeTracker",
    "ClipboardItem",
    "ClipboardMonitor",
    "ClipboardPoller",
    "ContentType",
    "ConversionResult",
    "HistoryStore",
    "LinkState",
    "LinkWriter",
    "PendingState",
    "SystemClipboard",
    "HTML_FORMAT",
    "RICH_TEXT_FORMATS",
    "RTF_FORMAT",
    "RTFD_FORMAT",
    "TEXT_FORMAT",
    "detect_content_type",
    "is_absolute_url",
]
