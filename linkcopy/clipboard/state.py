"""Mutable engine state shared between the poller, classifier and writer.

Both objects here are plain containers. Callers serialize access through the
monitor's lock; neither class locks on its own.
"""

from __future__ import annotations

from dataclasses import dataclass


class ChangeTracker:
    """Last clipboard change counter observed or produced by linkcopy.

    The poller compares the device's counter against this value to find
    external writes. Whenever linkcopy writes to the clipboard itself, it
    acknowledges the resulting counter here so the write is not mistaken for
    new content.
    """

    def __init__(self, initial: int = 0) -> None:
        self._value = initial

    @property
    def value(self) -> int:
        """The tracked counter."""
        return self._value

    def delta(self, current: int) -> int:
        """How many writes ``current`` is ahead of the tracked value."""
        return current - self._value

    def acknowledge(self, current: int) -> None:
        """Record ``current`` as seen."""
        self._value = current


@dataclass
class PendingState:
    """Double-copy bookkeeping for the most recent text content."""

    pending_content: str | None = None
    consecutive_copy_count: int = 0

    def reset(self) -> None:
        """Forget the pending content."""
        self.pending_content = None
        self.consecutive_copy_count = 0

    def record(self, content: str, delta: int) -> int:
        """Count a copy of ``content`` that arrived as ``delta`` clipboard writes.

        Returns:
            The consecutive copy count after recording.
        """
        if content == self.pending_content:
            self.consecutive_copy_count += delta
        else:
            self.pending_content = content
            self.consecutive_copy_count = 1
        return self.consecutive_copy_count
