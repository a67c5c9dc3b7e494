"""Terminal Notifier: prints conversion results to the shared console."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from linkcopy.core.constants import DEFAULT_MAX_TITLE_LENGTH
from linkcopy.core.utils import shorten
from linkcopy.display.console import get_console
from linkcopy.display.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Notifier that writes success and warning lines to a Rich console."""

    def __init__(
        self,
        console: Console | None = None,
        theme: Theme | None = None,
        max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
        enabled: bool = True,
    ) -> None:
        self._console = console
        self._theme = theme or DEFAULT_THEME
        self._max_title_length = max_title_length
        self.enabled = enabled

    @property
    def console(self) -> Console:
        return self._console or get_console()

    def success(self, title: str) -> None:
        if not self.enabled:
            return
        display_title = shorten(title, self._max_title_length)
        self.console.print(
            f"{self._theme.success_marker} Clipboard updated with link: {escape(display_title)}"
        )

    def warning(self, message: str) -> None:
        if not self.enabled:
            logger.debug("Notification suppressed: %s", message)
            return
        self.console.print(
            f"{self._theme.warning_marker} [{self._theme.warning}]{escape(message)}[/]"
        )
