"""Theme definitions for linkcopy terminal output."""

from dataclasses import dataclass, field

from linkcopy.clipboard.types import ContentType


@dataclass
class Theme:
    """Visual theme configuration.

    All styling in one place for easy customization.
    """
    # Status markers with Rich markup colors
    success_marker: str = "[green]●[/]"
    warning_marker: str = "[yellow]●[/]"

    # Rich style per history entry type
    type_styles: dict[ContentType, str] = field(default_factory=lambda: {
        ContentType.TEXT: "",
        ContentType.URL: "cyan",
        ContentType.RICH_TEXT: "magenta",
        ContentType.CONVERTED_LINK: "bold green",
    })

    # Short labels shown next to history entries
    type_labels: dict[ContentType, str] = field(default_factory=lambda: {
        ContentType.TEXT: "text",
        ContentType.URL: "url",
        ContentType.RICH_TEXT: "rich",
        ContentType.CONVERTED_LINK: "link",
    })

    timestamp: str = "dim"
    warning: str = "yellow"

    def style_for(self, content_type: ContentType) -> str:
        """Get the Rich style for a content type."""
        return self.type_styles.get(content_type, "")

    def label_for(self, content_type: ContentType) -> str:
        """Get the short label for a content type."""
        return self.type_labels.get(content_type, content_type.value)


# Default theme instance
DEFAULT_THEME = Theme()
