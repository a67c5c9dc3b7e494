"""Terminal output: shared console, notifications and history views."""

from linkcopy.display.console import get_console, set_console
from linkcopy.display.history import HistoryPrinter, preview, render_history_table
from linkcopy.display.notifier import ConsoleNotifier
from linkcopy.display.theme import DEFAULT_THEME, Theme

__all__ = [
    "ConsoleNotifier",
    "DEFAULT_THEME",
    "HistoryPrinter",
    "Theme",
    "get_console",
    "preview",
    "render_history_table",
    "set_console",
]
