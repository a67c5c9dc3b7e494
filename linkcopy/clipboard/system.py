"""SystemClipboard - ClipboardDevice backed by the OS clipboard.

Plain text always goes through pyperclip. On Windows the native clipboard
API (pywin32) adds what pyperclip cannot do:

- Change counter: the clipboard sequence number is used directly.
- Formats: every format on the clipboard is enumerated, so rich-text
  copies are recognized.
- Links: written as CF_HTML ``<a href="url">title</a>`` with the title as
  the plain-text alternative, so editors paste a clickable titled link.

Elsewhere the counter is emulated: it moves when the text differs from the
last text seen and on each of our own writes. Copying the same text twice
is invisible to it, so the double-copy trigger needs Windows (or another
ClipboardDevice with a host counter). Links are written as Markdown
``[title](url)`` there.
"""
from __future__ import annotations

import logging
import sys

import pyperclip

from linkcopy.clipboard.types import HTML_FORMAT, RTF_FORMAT, TEXT_FORMAT
from linkcopy.core.types import RichTextLink

if sys.platform == "win32":
    import pywintypes
    import win32clipboard
else:
    pywintypes = None
    win32clipboard = None

logger = logging.getLogger(__name__)

HTML_CLIPBOARD_FORMAT = "HTML Format"
RTF_CLIPBOARD_FORMAT = "Rich Text Format"

_CF_HTML_HEADER = (
    "Version:0.9\r\n"
    "StartHTML:{start_html:010d}\r\n"
    "EndHTML:{end_html:010d}\r\n"
    "StartFragment:{start_fragment:010d}\r\n"
    "EndFragment:{end_fragment:010d}\r\n"
)
_CF_HTML_PREFIX = b"<html><body><!--StartFragment-->"
_CF_HTML_SUFFIX = b"<!--EndFragment--></body></html>"


def build_cf_html(fragment: str) -> bytes:
    """Wrap an HTML fragment in the Windows CF_HTML envelope.

    The header offsets are byte positions into the returned payload, with
    the fragment encoded as UTF-8.
    """
    body = fragment.encode("utf-8")
    start_html = len(
        _CF_HTML_HEADER.format(start_html=0, end_html=0, start_fragment=0, end_fragment=0)
    )
    start_fragment = start_html + len(_CF_HTML_PREFIX)
    end_fragment = start_fragment + len(body)
    end_html = end_fragment + len(_CF_HTML_SUFFIX)
    header = _CF_HTML_HEADER.format(
        start_html=start_html,
        end_html=end_html,
        start_fragment=start_fragment,
        end_fragment=end_fragment,
    )
    return header.encode("ascii") + _CF_HTML_PREFIX + body + _CF_HTML_SUFFIX


class SystemClipboard:
    """The machine's clipboard."""

    def __init__(self, native: bool | None = None) -> None:
        """Initialize the adapter.

        Args:
            native: Use the Windows clipboard API for the change counter,
                format listing and link writes. Defaults to True on Windows.
        """
        if native is None:
            native = sys.platform == "win32"
        self._native = native
        self._emulated_count = 0
        self._last_text = self._paste()
        self._html_format = 0
        self._format_names: dict[int, str] = {}
        if native:
            self._html_format = win32clipboard.RegisterClipboardFormat(HTML_CLIPBOARD_FORMAT)
            self._format_names = {
                win32clipboard.CF_UNICODETEXT: TEXT_FORMAT,
                win32clipboard.CF_TEXT: TEXT_FORMAT,
                self._html_format: HTML_FORMAT,
                win32clipboard.RegisterClipboardFormat(RTF_CLIPBOARD_FORMAT): RTF_FORMAT,
            }

    @property
    def has_host_counter(self) -> bool:
        return self._native

    def _paste(self) -> str | None:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.debug("Clipboard read failed: %s", e)
            return None

    def _copy(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.error("Clipboard write failed: %s", e)
            return False
        self._last_text = text
        self._emulated_count += 1
        return True

    def _native_formats(self) -> frozenset[str] | None:
        """Map the formats on the Windows clipboard, or None if it is locked."""
        found: set[str] = set()
        try:
            win32clipboard.OpenClipboard(None)
        except pywintypes.error as e:
            logger.debug("OpenClipboard failed while listing formats: %s", e)
            return None
        try:
            fmt = win32clipboard.EnumClipboardFormats(0)
            while fmt:
                name = self._format_names.get(fmt)
                if name is not None:
                    found.add(name)
                fmt = win32clipboard.EnumClipboardFormats(fmt)
        finally:
            win32clipboard.CloseClipboard()
        return frozenset(found)

    def _write_native_link(self, link: RichTextLink) -> bool:
        try:
            win32clipboard.OpenClipboard(None)
        except pywintypes.error as e:
            logger.error("Clipboard write failed: %s", e)
            return False
        try:
            win32clipboard.EmptyClipboard()
            win32clipboard.SetClipboardData(self._html_format, build_cf_html(link.to_html()))
            win32clipboard.SetClipboardText(link.plain_text, win32clipboard.CF_UNICODETEXT)
        except pywintypes.error as e:
            logger.error("Clipboard write failed: %s", e)
            return False
        finally:
            win32clipboard.CloseClipboard()
        self._last_text = link.plain_text
        return True

    def change_count(self) -> int:
        if self._native:
            return int(win32clipboard.GetClipboardSequenceNumber())
        current = self._paste()
        if current != self._last_text:
            self._last_text = current
            self._emulated_count += 1
        return self._emulated_count

    def read_text(self) -> str | None:
        # pyperclip reports "no text" as an empty string
        return self._paste() or None

    def formats(self) -> frozenset[str]:
        if self._native:
            found = self._native_formats()
            if found is not None:
                return found
        return frozenset({TEXT_FORMAT}) if self._paste() else frozenset()

    def clear(self) -> int:
        self._copy("")
        return self.change_count()

    def write_text(self, text: str) -> bool:
        return self._copy(text)

    def write_link(self, link: RichTextLink) -> bool:
        if self._native:
            return self._write_native_link(link)
        return self._copy(link.to_markdown())
