"""Tests for the terminal history views."""

import io

import pytest
from rich.console import Console

from linkcopy.clipboard.types import ClipboardItem, ContentType
from linkcopy.display.history import HistoryPrinter, preview, render_history_table


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, width=200, color_system=None)


class TestPreview:
    """Tests for preview()."""

    def test_single_line(self) -> None:
        assert preview("hello") == "hello"

    def test_multiline_marks_continuation(self) -> None:
        assert preview("first\nsecond") == "first ..."

    def test_long_line_is_shortened(self) -> None:
        result = preview("y" * 100)
        assert len(result) == 80
        assert result.endswith("...")

    def test_empty(self) -> None:
        assert preview("") == ""


class TestHistoryPrinter:
    """Tests for HistoryPrinter as a history subscriber."""

    def test_prints_new_head(self, console: Console, output: io.StringIO) -> None:
        printer = HistoryPrinter(console)
        item = ClipboardItem.create("https://example.com", ContentType.URL)

        printer((item,))

        text = output.getvalue()
        assert "url" in text
        assert "https://example.com" in text

    def test_same_head_printed_once(self, console: Console, output: io.StringIO) -> None:
        """Deletes further down keep the head and print nothing."""
        printer = HistoryPrinter(console)
        head = ClipboardItem.create("head")
        older = ClipboardItem.create("older")

        printer((head, older))
        printer((head,))

        assert output.getvalue().count("head") == 1

    def test_clear_resets(self, console: Console, output: io.StringIO) -> None:
        printer = HistoryPrinter(console)
        item = ClipboardItem.create("again")

        printer((item,))
        printer(())
        printer((item,))

        assert output.getvalue().count("again") == 2

    def test_markup_is_escaped(self, console: Console, output: io.StringIO) -> None:
        printer = HistoryPrinter(console)
        printer((ClipboardItem.create("[red]text[/red]"),))

        assert "[red]text[/red]" in output.getvalue()


class TestRenderHistoryTable:
    """Tests for render_history_table()."""

    def test_rows(self, console: Console, output: io.StringIO) -> None:
        items = (
            ClipboardItem.create("Example Domain", ContentType.CONVERTED_LINK),
            ClipboardItem.create("https://example.com", ContentType.URL),
        )

        table = render_history_table(items)
        console.print(table)

        assert table.row_count == 2
        text = output.getvalue()
        assert "Example Domain" in text
        assert "link" in text
        assert "https://example.com" in text
