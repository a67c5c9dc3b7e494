"""ChangeClassifier - categorizes new clipboard content and drives the double-copy trigger."""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection
from urllib.parse import urlsplit

from linkcopy.clipboard.history import HistoryStore
from linkcopy.clipboard.state import PendingState
from linkcopy.clipboard.types import RICH_TEXT_FORMATS, ContentType
from linkcopy.core.constants import DEFAULT_TRIGGER_COUNT
from linkcopy.core.interfaces import ClipboardDevice

logger = logging.getLogger(__name__)

# RFC 3986: scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
# Whitespace, control characters and the ASCII characters RFC 3986 never
# allows unescaped. A backslash rules out Windows paths such as C:\Users.
_INVALID_URI_CHARACTERS = re.compile(r"[\s\x00-\x1f\x7f\\\"<>{}|^`]")


def is_absolute_url(text: str) -> bool:
    """Check whether ``text`` parses as an absolute URI with a scheme.

    Anything containing whitespace or a character that must be
    percent-encoded is rejected, so prose such as "Note: buy milk" is not
    mistaken for a ``note:`` URI and ``C:\\Users\\me`` is not a ``c:`` URI.
    """
    if not text or _INVALID_URI_CHARACTERS.search(text):
        return False
    if not _SCHEME_PATTERN.match(text):
        return False
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    return bool(parts.scheme)


def detect_content_type(text: str, formats: Collection[str]) -> ContentType:
    """Classify trimmed clipboard text.

    Rich text wins over URL, URL wins over plain text.
    """
    if any(fmt in RICH_TEXT_FORMATS for fmt in formats):
        return ContentType.RICH_TEXT
    if is_absolute_url(text):
        return ContentType.URL
    return ContentType.TEXT


class ChangeClassifier:
    """Reads the clipboard after a change and records what was copied."""

    def __init__(
        self,
        device: ClipboardDevice,
        history: HistoryStore,
        pending: PendingState,
        on_trigger: Callable[[str], None],
        *,
        trigger_count: int = DEFAULT_TRIGGER_COUNT,
        auto_convert: bool = True,
    ) -> None:
        """Initialize the classifier.

        Args:
            device: Clipboard to read from
            history: Store receiving every classified event
            pending: Double-copy state, owned by the caller
            on_trigger: Called with the URL when the double-copy threshold is reached
            trigger_count: Consecutive copies needed to fire on_trigger
            auto_convert: When False the counter is kept but on_trigger never fires
        """
        self._device = device
        self._history = history
        self._pending = pending
        self._on_trigger = on_trigger
        self._trigger_count = trigger_count
        self.auto_convert = auto_convert

    @property
    def trigger_count(self) -> int:
        return self._trigger_count

    def classify(self, delta: int) -> ContentType | None:
        """Classify the current clipboard content.

        Args:
            delta: Number of clipboard writes since the previous classification

        Returns:
            The detected type, or None when there was nothing to classify.
        """
        content = self._device.read_text()
        if content is None:
            # Images, files and other non-text payloads
            self._pending.reset()
            return None

        trimmed = content.strip()
        if not trimmed:
            return None

        count = self._pending.record(trimmed, delta)
        content_type = detect_content_type(trimmed, self._device.formats())

        if (
            content_type is ContentType.URL
            and self.auto_convert
            and count >= self._trigger_count
        ):
            logger.info("Double copy detected (count=%d), converting: %s", count, trimmed)
            self._on_trigger(trimmed)

        self._history.insert(trimmed, content_type)
        return content_type
