"""ClipboardMonitor - wires the poller, classifier, history and writer together.

All engine state (pending double-copy state, history, tracked change counter)
is mutated under one re-entrant lock owned here. Poll ticks run on the event
loop; every triggered conversion is a separate task that neither blocks the
poller nor waits for other conversions.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING

from linkcopy.clipboard.classifier import ChangeClassifier
from linkcopy.clipboard.history import HistoryStore
from linkcopy.clipboard.poller import ClipboardPoller
from linkcopy.clipboard.state import ChangeTracker, PendingState
from linkcopy.clipboard.types import ContentType
from linkcopy.clipboard.writer import ConversionResult, LinkWriter
from linkcopy.core.constants import (
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TRIGGER_COUNT,
)
from linkcopy.core.interfaces import ClipboardDevice, Notifier
from linkcopy.fetch.title import TitleFetcher

if TYPE_CHECKING:
    from linkcopy.config.schema import Config
    from linkcopy.core.interfaces import NetworkTransport

logger = logging.getLogger(__name__)


class ClipboardMonitor:
    """Watches the clipboard and converts double-copied URLs into titled links."""

    def __init__(
        self,
        device: ClipboardDevice,
        fetcher: TitleFetcher,
        notifier: Notifier,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        trigger_count: int = DEFAULT_TRIGGER_COUNT,
        auto_convert: bool = True,
    ) -> None:
        """Initialize the monitor.

        Args:
            device: Clipboard to watch and write
            fetcher: Title fetcher used for conversions
            notifier: Receives success and warning events
            poll_interval: Seconds between change-counter samples
            history_capacity: Maximum history length
            trigger_count: Consecutive copies of a URL that trigger conversion
            auto_convert: Convert on double copy (history is kept either way)
        """
        self._device = device
        self._lock = threading.RLock()
        self._tracker = ChangeTracker(device.change_count())
        self._pending = PendingState()
        self._tasks: set[asyncio.Task[ConversionResult]] = set()

        self.history = HistoryStore(device, self._tracker, history_capacity, self._lock)
        self._writer = LinkWriter(
            device,
            fetcher,
            self.history,
            self._pending,
            self._tracker,
            notifier,
            self._lock,
        )
        self._classifier = ChangeClassifier(
            device,
            self.history,
            self._pending,
            self._schedule_conversion,
            trigger_count=trigger_count,
            auto_convert=auto_convert,
        )
        self._poller = ClipboardPoller(
            device,
            self._tracker,
            self._classifier.classify,
            poll_interval,
            self._lock,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        device: ClipboardDevice,
        transport: NetworkTransport,
        notifier: Notifier,
    ) -> ClipboardMonitor:
        """Build a monitor from validated configuration."""
        fetcher = TitleFetcher(transport, timeout=config.fetch.timeout)
        return cls(
            device,
            fetcher,
            notifier,
            poll_interval=config.polling.interval,
            history_capacity=config.history.capacity,
            trigger_count=config.conversion.trigger_count,
            auto_convert=config.conversion.enabled,
        )

    # --- Lifecycle ---

    @property
    def is_running(self) -> bool:
        return self._poller.is_running

    def start(self) -> None:
        """Start polling. Must be called from a running event loop."""
        self._poller.start()

    def stop(self) -> None:
        """Stop polling. In-flight conversions keep running; see drain()."""
        self._poller.stop()

    async def drain(self) -> list[ConversionResult]:
        """Wait for every in-flight conversion to finish."""
        results: list[ConversionResult] = []
        while self._tasks:
            pending = list(self._tasks)
            for outcome in await asyncio.gather(*pending, return_exceptions=True):
                if isinstance(outcome, BaseException):
                    logger.error("Conversion task failed: %r", outcome)
                else:
                    results.append(outcome)
        return results

    def poll_once(self) -> int:
        """Run a single poll tick. Returns the observed delta."""
        return self._poller.tick()

    # --- State ---

    @property
    def auto_convert(self) -> bool:
        return self._classifier.auto_convert

    @auto_convert.setter
    def auto_convert(self, enabled: bool) -> None:
        self._classifier.auto_convert = enabled
        logger.info("Auto-convert %s", "enabled" if enabled else "disabled")

    @property
    def pending(self) -> PendingState:
        """Double-copy state. Read-only by convention."""
        return self._pending

    @property
    def tracked_change_count(self) -> int:
        return self._tracker.value

    @property
    def in_flight(self) -> int:
        """Number of conversions not yet finished."""
        return len(self._tasks)

    # --- Conversions ---

    def convert_history_item(self, item_id: str) -> asyncio.Task[ConversionResult] | None:
        """Convert a URL entry from the history into a titled link.

        Returns:
            The conversion task, or None if the id is unknown or the entry is
            not a URL.
        """
        item = self.history.get(item_id)
        if item is None or item.type is not ContentType.URL:
            logger.debug("History item %s is not a convertible URL", item_id)
            return None
        return self._schedule_conversion(item.content)

    def _schedule_conversion(self, url: str) -> asyncio.Task[ConversionResult]:
        with self._lock:
            started = self._device.change_count()
        task = asyncio.get_running_loop().create_task(
            self._writer.convert(url, started), name="linkcopy-convert"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
