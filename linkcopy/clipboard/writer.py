"""LinkWriter - fetches a title and writes the resulting rich-text link to the clipboard.

Each conversion moves through:

    IDLE -> PENDING (fetch in flight) -> WRITE_SUCCESS | WRITE_FALLBACK | SKIPPED | WRITE_FAILED

On fetch success the titled link is written unconditionally. On fetch
failure a fallback link (URL as visible text) is written only if the
clipboard is untouched since the conversion was triggered: same change
counter, and still holding the URL. Otherwise the user copied something else
in the meantime and the write is skipped.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum

from linkcopy.clipboard.history import HistoryStore
from linkcopy.clipboard.state import ChangeTracker, PendingState
from linkcopy.core.errors import FetchError
from linkcopy.core.interfaces import ClipboardDevice, Notifier
from linkcopy.core.types import RichTextLink
from linkcopy.fetch.title import TitleFetcher

logger = logging.getLogger(__name__)


class LinkState(Enum):
    """Lifecycle of a single conversion."""

    IDLE = "idle"
    PENDING = "pending"
    WRITE_SUCCESS = "write_success"
    WRITE_FALLBACK = "write_fallback"
    SKIPPED = "skipped"  # Fetch failed and the clipboard changed meanwhile
    WRITE_FAILED = "write_failed"  # Host rejected the write


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of LinkWriter.convert()."""

    url: str
    state: LinkState
    title: str | None = None
    error: FetchError | None = None

    @property
    def wrote_link(self) -> bool:
        return self.state in (LinkState.WRITE_SUCCESS, LinkState.WRITE_FALLBACK)


class LinkWriter:
    """Turns a URL into a titled link on the clipboard."""

    def __init__(
        self,
        device: ClipboardDevice,
        fetcher: TitleFetcher,
        history: HistoryStore,
        pending: PendingState,
        tracker: ChangeTracker,
        notifier: Notifier,
        lock: threading.RLock | None = None,
    ) -> None:
        self._device = device
        self._fetcher = fetcher
        self._history = history
        self._pending = pending
        self._tracker = tracker
        self._notifier = notifier
        self._lock = lock or threading.RLock()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of fetches currently awaiting the network."""
        return self._in_flight

    async def convert(self, url: str, started_change_count: int | None = None) -> ConversionResult:
        """Fetch the title of ``url`` and write the link.

        Args:
            url: The URL found on the clipboard
            started_change_count: Clipboard change counter when the conversion
                was triggered. Read from the device now if omitted.

        Returns:
            The final state of this conversion.
        """
        if started_change_count is None:
            with self._lock:
                started_change_count = self._device.change_count()

        logger.info("Processing URL: %s", url)
        self._in_flight += 1
        try:
            title = await self._fetcher.fetch_title(url)
        except FetchError as e:
            logger.warning("Failed to process URL %s: %s", url, e.message)
            return self._handle_failure(url, e, started_change_count)
        finally:
            self._in_flight -= 1

        return self._handle_success(url, title)

    def _handle_success(self, url: str, title: str) -> ConversionResult:
        with self._lock:
            written = self._write_link(RichTextLink(title=title, url=url))
        if not written:
            return ConversionResult(url=url, state=LinkState.WRITE_FAILED, title=title)

        self._notify_success(title)
        return ConversionResult(url=url, state=LinkState.WRITE_SUCCESS, title=title)

    def _handle_failure(
        self, url: str, error: FetchError, started_change_count: int
    ) -> ConversionResult:
        with self._lock:
            if self._clipboard_unchanged(url, started_change_count):
                written = self._write_link(RichTextLink(title=url, url=url))
                state = LinkState.WRITE_FALLBACK if written else LinkState.WRITE_FAILED
            else:
                logger.info("Clipboard changed during fetch, not writing fallback for %s", url)
                state = LinkState.SKIPPED

        if state is LinkState.SKIPPED:
            message = (
                f"Could not fetch page title ({error.message}). "
                "The clipboard changed meanwhile, so it was left untouched."
            )
        else:
            message = f"Could not fetch page title ({error.message}). Using URL as link text."
        self._notify_warning(message)

        title = url if state is LinkState.WRITE_FALLBACK else None
        return ConversionResult(url=url, state=state, title=title, error=error)

    def _clipboard_unchanged(self, url: str, started_change_count: int) -> bool:
        """Race guard: is the clipboard exactly as it was when the conversion started?"""
        if self._device.change_count() != started_change_count:
            return False
        current = self._device.read_text()
        return current is not None and current.strip() == url

    def _write_link(self, link: RichTextLink) -> bool:
        """Write ``link`` and record it. Caller holds the lock."""
        self._device.clear()
        if not self._device.write_link(link):
            logger.error("Clipboard rejected rich text link for %s", link.url)
            return False

        self._tracker.acknowledge(self._device.change_count())
        self._pending.reset()
        self._history.insert_converted(link.title)
        logger.info("Clipboard updated with rich text link.")
        return True

    def _notify_success(self, title: str) -> None:
        try:
            self._notifier.success(title)
        except Exception:
            logger.exception("Notifier failed to deliver success event")

    def _notify_warning(self, message: str) -> None:
        try:
            self._notifier.warning(message)
        except Exception:
            logger.exception("Notifier failed to deliver warning event")
