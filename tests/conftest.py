"""Shared pytest fixtures and configuration for pytest."""

from __future__ import annotations

import asyncio
import sys

import pytest

from linkcopy.clipboard.monitor import ClipboardMonitor
from linkcopy.clipboard.types import HTML_FORMAT, RTF_FORMAT, TEXT_FORMAT
from linkcopy.core.types import FetchResponse, RichTextLink
from linkcopy.fetch.title import TitleFetcher


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "windows: mark test to run only on Windows")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_windows = pytest.mark.skip(reason="Windows-only test")

    for item in items:
        if "windows" in item.keywords and sys.platform != "win32":
            item.add_marker(skip_windows)


# --- Test doubles ---


class FakeClipboard:
    """In-memory ClipboardDevice with a host-style change counter.

    copy() simulates a user copy; the write_* methods are what linkcopy
    itself calls. Every write of either kind bumps the counter.
    """

    def __init__(self) -> None:
        self.count = 0
        self.text: str | None = None
        self.advertised: frozenset[str] = frozenset()
        self.links: list[RichTextLink] = []
        self.texts_written: list[str] = []
        self.reject_writes = False

    # User actions

    def copy(self, text: str, formats: set[str] | None = None) -> None:
        self.text = text
        self.advertised = frozenset({TEXT_FORMAT} | (formats or set()))
        self.count += 1

    def copy_image(self) -> None:
        self.text = None
        self.advertised = frozenset({"image/png"})
        self.count += 1

    # ClipboardDevice

    def change_count(self) -> int:
        return self.count

    def read_text(self) -> str | None:
        return self.text

    def formats(self) -> frozenset[str]:
        return self.advertised

    def clear(self) -> int:
        self.text = None
        self.advertised = frozenset()
        self.count += 1
        return self.count

    def write_text(self, text: str) -> bool:
        if self.reject_writes:
            return False
        self.texts_written.append(text)
        self.text = text
        self.advertised = frozenset({TEXT_FORMAT})
        self.count += 1
        return True

    def write_link(self, link: RichTextLink) -> bool:
        if self.reject_writes:
            return False
        self.links.append(link)
        self.text = link.plain_text
        self.advertised = frozenset({TEXT_FORMAT, HTML_FORMAT, RTF_FORMAT})
        self.count += 1
        return True


class FakeTransport:
    """NetworkTransport returning canned responses per URL.

    Set ``gate`` to an unset asyncio.Event to hold requests in flight until
    the test sets it.
    """

    def __init__(self, default: FetchResponse | None = None) -> None:
        self.responses: dict[str, FetchResponse | BaseException] = {}
        self.default = default or FetchResponse(body=b"<html></html>", status_code=200)
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    def page(self, url: str, html: str | bytes, status_code: int = 200) -> None:
        body = html.encode("utf-8") if isinstance(html, str) else html
        self.responses[url] = FetchResponse(body=body, status_code=status_code)

    def fail(self, url: str, error: BaseException) -> None:
        self.responses[url] = error

    async def request(self, url: str, timeout: float) -> FetchResponse:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        result = self.responses.get(url, self.default)
        if isinstance(result, BaseException):
            raise result
        return result


class RecordingNotifier:
    """Notifier that remembers every event."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.warnings: list[str] = []

    def success(self, title: str) -> None:
        self.successes.append(title)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


# --- Fixtures ---


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fetcher(transport: FakeTransport) -> TitleFetcher:
    return TitleFetcher(transport, timeout=2.0)


@pytest.fixture
def monitor(
    clipboard: FakeClipboard, fetcher: TitleFetcher, notifier: RecordingNotifier
) -> ClipboardMonitor:
    """Monitor over the fakes, driven by poll_once() rather than the timer."""
    return ClipboardMonitor(clipboard, fetcher, notifier, poll_interval=0.01)
