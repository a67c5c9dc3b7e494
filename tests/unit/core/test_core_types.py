"""Tests for shared value types."""

import pytest

from linkcopy.core.types import FetchResponse, RichTextLink


class TestFetchResponse:
    """Tests for FetchResponse.is_success."""

    @pytest.mark.parametrize(
        "status,expected",
        [(200, True), (204, True), (299, True), (199, False), (301, False), (404, False), (500, False)],
    )
    def test_is_success(self, status: int, expected: bool) -> None:
        assert FetchResponse(body=b"", status_code=status).is_success is expected


class TestRichTextLink:
    """Tests for RichTextLink renderings."""

    def test_plain_text_is_title(self) -> None:
        link = RichTextLink(title="Example Domain", url="https://example.com")
        assert link.plain_text == "Example Domain"

    def test_html(self) -> None:
        link = RichTextLink(title="Tom & Jerry <3", url='https://example.com/?a=1&b="2"')

        assert link.to_html() == (
            '<a href="https://example.com/?a=1&amp;b=&quot;2&quot;">Tom &amp; Jerry &lt;3</a>'
        )

    def test_markdown(self) -> None:
        link = RichTextLink(title="Example Domain", url="https://example.com")
        assert link.to_markdown() == "[Example Domain](https://example.com)"

    def test_markdown_escapes_brackets_and_parens(self) -> None:
        link = RichTextLink(title="[draft] notes", url="https://en.wikipedia.org/wiki/Foo_(bar)")

        assert link.to_markdown() == (
            "[\\[draft\\] notes](https://en.wikipedia.org/wiki/Foo_(bar%29)"
        )
