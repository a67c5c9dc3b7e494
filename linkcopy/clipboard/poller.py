"""ClipboardPoller - samples the clipboard change counter on a fixed interval."""
from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable

from linkcopy.clipboard.state import ChangeTracker
from linkcopy.core.constants import DEFAULT_POLL_INTERVAL
from linkcopy.core.interfaces import ClipboardDevice

logger = logging.getLogger(__name__)


class ClipboardPoller:
    """Detects that the clipboard changed, and by how many writes.

    The poller never reads clipboard content. Each tick compares the device's
    change counter with the tracked value and, when it moved forward, hands
    the difference to ``on_change``. Several writes between two ticks arrive
    as one call with a larger delta.
    """

    def __init__(
        self,
        device: ClipboardDevice,
        tracker: ChangeTracker,
        on_change: Callable[[int], object],
        interval: float = DEFAULT_POLL_INTERVAL,
        lock: threading.RLock | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self._device = device
        self._tracker = tracker
        self._on_change = on_change
        self._interval = interval
        self._lock = lock or threading.RLock()
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> int:
        """Sample the change counter once.

        Returns:
            The delta passed to on_change, or 0 if nothing changed.
        """
        with self._lock:
            current = self._device.change_count()
            delta = self._tracker.delta(current)
            if delta <= 0:
                return 0
            try:
                self._on_change(delta)
            finally:
                self._tracker.acknowledge(current)
            return delta

    def start(self) -> None:
        """Start polling on the running event loop.

        Starting while already running restarts the loop. Clipboard content
        present before the start is not reported.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        self.stop()
        logger.info("Starting clipboard monitoring (interval=%.2fs)", self._interval)
        with self._lock:
            self._tracker.acknowledge(self._device.change_count())
        self._task = loop.create_task(self._run(), name="linkcopy-poller")

    def stop(self) -> None:
        """Stop polling. No-op when not running."""
        if self._task is None:
            return
        logger.info("Stopping clipboard monitoring.")
        self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while True:
            try:
                self.tick()
            except Exception:
                logger.exception("Clipboard poll failed")
            await asyncio.sleep(self._interval)
