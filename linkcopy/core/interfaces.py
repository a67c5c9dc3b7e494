"""Core interfaces (protocols) for linkcopy.

The engine never touches the OS clipboard, the network stack or the
notification channel directly. It is handed objects that satisfy these
Protocols, so tests can pass in-memory doubles and the CLI can pass the real
adapters.
"""

from typing import Protocol

from linkcopy.core.types import FetchResponse, RichTextLink


class ClipboardDevice(Protocol):
    """Protocol for the shared system clipboard.

    The change counter is maintained by the host and increases on every write,
    whatever the content. The engine compares counters instead of content to
    decide that "something changed".

    Example:
        class MemoryClipboard:
            def change_count(self) -> int:
                return self._count

            def read_text(self) -> str | None:
                return self._text
            ...
    """

    def change_count(self) -> int:
        """Return the host's monotonically increasing change counter."""
        ...

    def read_text(self) -> str | None:
        """Return the clipboard's plain-text representation, or None if there is none."""
        ...

    def formats(self) -> frozenset[str]:
        """Return the format tags currently advertised (e.g. ``text/plain``, ``text/rtf``)."""
        ...

    def clear(self) -> int:
        """Clear the clipboard and return the new change counter."""
        ...

    def write_text(self, text: str) -> bool:
        """Write plain text. Returns False if the host rejected the write."""
        ...

    def write_link(self, link: RichTextLink) -> bool:
        """Write a rich-text link. Returns False if the host rejected the write."""
        ...


class NetworkTransport(Protocol):
    """Protocol for the HTTP layer used by the title fetcher.

    One call is one GET. Redirects the transport follows transparently are
    fine; retries are not.
    """

    async def request(self, url: str, timeout: float) -> FetchResponse:
        """Fetch ``url``.

        Args:
            url: Absolute URL to GET.
            timeout: Seconds allowed for the whole request/response cycle.

        Returns:
            The response body and status code, whatever the status.

        Raises:
            FetchError: On timeout, connection or DNS failure.
        """
        ...


class Notifier(Protocol):
    """Protocol for the user-facing notification channel (fire-and-forget)."""

    def success(self, title: str) -> None:
        """Report that the clipboard now holds a titled link."""
        ...

    def warning(self, message: str) -> None:
        """Report a conversion problem."""
        ...
