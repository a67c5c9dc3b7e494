"""HistoryStore - bounded, deduplicating, most-recent-first clipboard history."""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from linkcopy.clipboard.state import ChangeTracker
from linkcopy.clipboard.types import ClipboardItem, ContentType
from linkcopy.core.constants import DEFAULT_HISTORY_CAPACITY
from linkcopy.core.errors import ClipboardWriteError
from linkcopy.core.interfaces import ClipboardDevice

logger = logging.getLogger(__name__)

HistoryCallback = Callable[[tuple[ClipboardItem, ...]], None]


class HistoryStore:
    """In-memory record of classified clipboard events.

    Items are kept newest first. Inserting the same (content, type) pair as the
    current head does nothing, and the oldest items are evicted once the store
    grows past its capacity. History lives for the process lifetime only.
    """

    def __init__(
        self,
        device: ClipboardDevice,
        tracker: ChangeTracker,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
        lock: threading.RLock | None = None,
    ) -> None:
        """Initialize the history store.

        Args:
            device: Clipboard used by recopy()
            tracker: Shared change tracker, updated after recopy() writes
            capacity: Maximum number of items kept
            lock: Shared lock serializing engine state (a private one if omitted)
        """
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._device = device
        self._tracker = tracker
        self._capacity = capacity
        self._lock = lock or threading.RLock()
        self._items: list[ClipboardItem] = []
        self._subscribers: list[HistoryCallback] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def items(self) -> tuple[ClipboardItem, ...]:
        """Snapshot of the history, newest first."""
        with self._lock:
            return tuple(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, item_id: str) -> ClipboardItem | None:
        """Look up an item by id."""
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    # --- Mutations ---

    def insert(self, content: str, type: ContentType) -> ClipboardItem | None:
        """Prepend a new item unless it duplicates the head.

        Returns:
            The new item, or None when nothing was inserted (empty content or
            same (content, type) as the head).
        """
        trimmed = content.strip()
        if not trimmed:
            return None

        with self._lock:
            if self._items and self._items[0].matches(trimmed, type):
                return None
            item = ClipboardItem.create(trimmed, type)
            self._items.insert(0, item)
            del self._items[self._capacity:]
            snapshot = tuple(self._items)

        logger.debug("History insert: %s (%d chars)", type.value, len(trimmed))
        self._notify(snapshot)
        return item

    def insert_converted(self, content: str) -> ClipboardItem | None:
        """Record the result of a link conversion."""
        return self.insert(content, ContentType.CONVERTED_LINK)

    def delete(self, item_id: str) -> bool:
        """Remove an item. Returns False if the id is unknown."""
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[index]
                    snapshot = tuple(self._items)
                    break
            else:
                return False

        self._notify(snapshot)
        return True

    def clear(self) -> None:
        """Remove every item."""
        with self._lock:
            self._items.clear()
        logger.info("History cleared.")
        self._notify(())

    def recopy(self, item_id: str) -> ClipboardItem:
        """Write an item's content back to the clipboard as plain text.

        The tracked change counter is moved to the counter produced by this
        write, so the poller does not classify it as a fresh copy.

        Raises:
            KeyError: If no item has this id
            ClipboardWriteError: If the host rejected the write
        """
        with self._lock:
            item = self.get(item_id)
            if item is None:
                raise KeyError(f"History item '{item_id}' not found")

            self._device.clear()
            if not self._device.write_text(item.content):
                logger.error("Clipboard rejected re-copy of history item %s", item_id)
                raise ClipboardWriteError(f"Could not copy history item '{item_id}' to clipboard")
            self._tracker.acknowledge(self._device.change_count())

        logger.info("Copied item from history to clipboard: %s", item.type.value)
        return item

    # --- Subscriptions ---

    def subscribe(self, callback: HistoryCallback) -> Callable[[], None]:
        """Register a callback receiving a snapshot after every change.

        Returns:
            A function that removes the subscription. Safe to call twice.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, snapshot: tuple[ClipboardItem, ...]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("History subscriber %r failed", callback)
