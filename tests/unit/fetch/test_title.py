"""Tests for page title extraction and TitleFetcher."""

import asyncio

import pytest

from linkcopy.core.errors import FetchError
from linkcopy.fetch.title import TitleFetcher, decode_body, extract_title, fallback_title


class TestFallbackTitle:
    """Tests for fallback_title()."""

    def test_host(self) -> None:
        assert fallback_title("https://example.com/nonexistent") == "example.com"

    def test_host_without_port(self) -> None:
        assert fallback_title("http://localhost:8080/x") == "localhost"

    def test_no_host_returns_url(self) -> None:
        assert fallback_title("mailto:user@example.com") == "mailto:user@example.com"

    def test_unparseable_returns_url(self) -> None:
        assert fallback_title("http://[::1") == "http://[::1"


class TestExtractTitle:
    """Tests for extract_title()."""

    def test_simple(self) -> None:
        assert extract_title("<title>Example Domain</title>", "fb") == "Example Domain"

    def test_case_insensitive_with_attributes(self) -> None:
        doc = '<HTML><TITLE lang="en">Shouting</TITLE></HTML>'
        assert extract_title(doc, "fb") == "Shouting"

    def test_trims_and_spans_lines(self) -> None:
        doc = "<title>\n   Multi\n   line\n</title>"
        assert extract_title(doc, "fb") == "Multi\n   line"

    def test_first_title_wins(self) -> None:
        doc = "<title>First</title><svg><title>Second</title></svg>"
        assert extract_title(doc, "fb") == "First"

    def test_entities_decoded(self) -> None:
        assert extract_title("<title>Tom &amp; Jerry &#8211; &quot;x&quot;</title>", "fb") == (
            'Tom & Jerry – "x"'
        )

    def test_missing_title(self) -> None:
        assert extract_title("<html><body>no title</body></html>", "example.com") == "example.com"

    def test_blank_title(self) -> None:
        assert extract_title("<title>   </title>", "example.com") == "example.com"

    def test_similar_tag_is_not_title(self) -> None:
        assert extract_title("<titlebar>nope</titlebar>", "fb") == "fb"


class TestDecodeBody:
    """Tests for decode_body()."""

    def test_utf8(self) -> None:
        assert decode_body("café".encode("utf-8")) == "café"

    def test_latin1_fallback(self) -> None:
        assert decode_body("café".encode("latin-1")) == "café"


class TestTitleFetcher:
    """Tests for TitleFetcher.fetch_title()."""

    @pytest.mark.asyncio
    async def test_title(self, fetcher: TitleFetcher, transport) -> None:
        transport.page("https://example.com", "<html><head><title>Example Domain</title></head></html>")

        assert await fetcher.fetch_title("https://example.com") == "Example Domain"
        assert transport.calls == ["https://example.com"]

    @pytest.mark.asyncio
    async def test_not_found_uses_host(self, fetcher: TitleFetcher, transport) -> None:
        url = "https://example.com/nonexistent"
        transport.page(url, "<title>404 Not Found</title>", status_code=404)

        assert await fetcher.fetch_title(url) == "example.com"

    @pytest.mark.asyncio
    async def test_server_error_uses_host(self, fetcher: TitleFetcher, transport) -> None:
        transport.page("https://example.com/boom", "oops", status_code=500)
        assert await fetcher.fetch_title("https://example.com/boom") == "example.com"

    @pytest.mark.asyncio
    async def test_missing_title_uses_host(self, fetcher: TitleFetcher, transport) -> None:
        transport.page("https://example.com/plain", "<p>hi</p>")
        assert await fetcher.fetch_title("https://example.com/plain") == "example.com"

    @pytest.mark.asyncio
    async def test_latin1_page(self, fetcher: TitleFetcher, transport) -> None:
        transport.page("https://example.com", "<title>Café</title>".encode("latin-1"))
        assert await fetcher.fetch_title("https://example.com") == "Café"

    @pytest.mark.asyncio
    async def test_connection_error(self, fetcher: TitleFetcher, transport) -> None:
        transport.fail("https://down.example", ConnectionRefusedError("refused"))

        with pytest.raises(FetchError, match="Request failed") as exc_info:
            await fetcher.fetch_title("https://down.example")
        assert exc_info.value.url == "https://down.example"

    @pytest.mark.asyncio
    async def test_transport_fetch_error_propagates(self, fetcher: TitleFetcher, transport) -> None:
        transport.fail("https://bad.example", FetchError("Invalid URL: nope", url="https://bad.example"))

        with pytest.raises(FetchError, match="Invalid URL"):
            await fetcher.fetch_title("https://bad.example")

    @pytest.mark.asyncio
    async def test_timeout(self, transport) -> None:
        fetcher = TitleFetcher(transport, timeout=0.05)
        transport.gate = asyncio.Event()

        with pytest.raises(FetchError, match="timed out after 0.05s"):
            await fetcher.fetch_title("https://slow.example")

    def test_invalid_timeout(self, transport) -> None:
        with pytest.raises(ValueError, match="positive"):
            TitleFetcher(transport, timeout=0)
