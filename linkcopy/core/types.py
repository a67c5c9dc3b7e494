"""Shared value types passed across the engine's seams."""

from __future__ import annotations

import html
from dataclasses import dataclass


@dataclass(frozen=True)
class FetchResponse:
    """Raw result of a single page request."""

    body: bytes
    status_code: int

    @property
    def is_success(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status_code <= 299


@dataclass(frozen=True)
class RichTextLink:
    """A clipboard payload whose visible text is ``title`` and whose link target is ``url``."""

    title: str
    url: str

    @property
    def plain_text(self) -> str:
        """The visible text, as a plain-text reader sees it."""
        return self.title

    def to_html(self) -> str:
        """Render as an HTML anchor."""
        return f'<a href="{html.escape(self.url, quote=True)}">{html.escape(self.title)}</a>'

    def to_markdown(self) -> str:
        """Render as a Markdown inline link."""
        title = self.title.replace("[", "\\[").replace("]", "\\]")
        url = self.url.replace(")", "%29")
        return f"[{title}]({url})"
