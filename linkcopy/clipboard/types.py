"""Clipboard history types and dataclasses."""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

# Format tags advertised by clipboard devices
TEXT_FORMAT = "text/plain"
HTML_FORMAT = "text/html"
RTF_FORMAT = "text/rtf"
RTFD_FORMAT = "text/rtfd"

# Formats that mark clipboard content as rich text
RICH_TEXT_FORMATS = frozenset({RTF_FORMAT, RTFD_FORMAT})


class ContentType(Enum):
    """Category of a classified clipboard event."""

    TEXT = "text"
    URL = "url"
    RICH_TEXT = "richText"
    CONVERTED_LINK = "convertedLink"  # Written by linkcopy itself


@dataclass(frozen=True)
class ClipboardItem:
    """A single history entry."""

    content: str
    type: ContentType
    display_content: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)  # Unix timestamp

    def __post_init__(self) -> None:
        if not self.display_content:
            object.__setattr__(self, "display_content", self.content)

    @classmethod
    def create(
        cls,
        content: str,
        type: ContentType = ContentType.TEXT,
        display_content: str | None = None,
    ) -> ClipboardItem:
        """Create an item with a fresh id and the current time."""
        return cls(content=content, type=type, display_content=display_content or content)

    def matches(self, content: str, type: ContentType) -> bool:
        """True if this item holds the same (content, type) pair."""
        return self.content == content and self.type == type
