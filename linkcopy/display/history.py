"""Terminal views of the clipboard history."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linkcopy.clipboard.types import ClipboardItem
from linkcopy.core.utils import shorten
from linkcopy.display.console import get_console
from linkcopy.display.theme import DEFAULT_THEME, Theme

PREVIEW_LENGTH = 80


def preview(text: str, max_length: int = PREVIEW_LENGTH) -> str:
    """First line of ``text``, shortened for a single terminal row."""
    lines = text.splitlines()
    first = lines[0] if lines else ""
    if len(lines) > 1:
        first += " ..."
    return shorten(first, max_length)


def render_history_table(items: Iterable[ClipboardItem], theme: Theme | None = None) -> Table:
    """Build a table of history items, newest first."""
    theme = theme or DEFAULT_THEME
    table = Table(title="Clipboard history", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Time", style=theme.timestamp)
    table.add_column("Type")
    table.add_column("Content", overflow="fold")

    for index, item in enumerate(items, start=1):
        style = theme.style_for(item.type)
        table.add_row(
            str(index),
            datetime.fromtimestamp(item.timestamp).strftime("%H:%M:%S"),
            f"[{style}]{theme.label_for(item.type)}[/]" if style else theme.label_for(item.type),
            escape(preview(item.display_content)),
        )
    return table


class HistoryPrinter:
    """History subscriber that prints each new head entry as it arrives.

    Example:
        printer = HistoryPrinter()
        unsubscribe = monitor.history.subscribe(printer)
    """

    def __init__(self, console: Console | None = None, theme: Theme | None = None) -> None:
        self._console = console
        self._theme = theme or DEFAULT_THEME
        self._last_id: str | None = None

    @property
    def console(self) -> Console:
        return self._console or get_console()

    def __call__(self, items: tuple[ClipboardItem, ...]) -> None:
        if not items:
            self._last_id = None
            return
        head = items[0]
        if head.id == self._last_id:
            # Deletes and evictions leave the head in place
            return
        self._last_id = head.id
        self.console.print(self.format_item(head))

    def format_item(self, item: ClipboardItem) -> str:
        """Format one history entry as a Rich markup line."""
        time_text = datetime.fromtimestamp(item.timestamp).strftime("%H:%M:%S")
        label = f"{self._theme.label_for(item.type):<4}"
        style = self._theme.style_for(item.type)
        if style:
            label = f"[{style}]{label}[/]"
        return (
            f"[{self._theme.timestamp}]{time_text}[/] {label} "
            f"{escape(preview(item.display_content))}"
        )
