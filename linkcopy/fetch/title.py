"""Page title fetching.

fetch_title() resolves every "normal" outcome to a string:
- 2xx page with a <title>: the decoded, trimmed title
- non-2xx status, undecodable body, missing or empty title: the URL's host
  (or the whole URL when it has no host)

Only network-layer failures (timeout, refused connection, DNS) raise, as
FetchError. There is no retry.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re
from urllib.parse import urlsplit

from linkcopy.core.constants import DEFAULT_FETCH_TIMEOUT
from linkcopy.core.errors import FetchError
from linkcopy.core.interfaces import NetworkTransport

logger = logging.getLogger(__name__)

# First <title> element; attributes ignored, content may span lines
TITLE_PATTERN = re.compile(r"<title(?:\s[^>]*)?>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)


def fallback_title(url: str) -> str:
    """Host component of ``url``, or the URL itself if it has no host."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    return host or url


def decode_body(body: bytes) -> str | None:
    """Decode a page body as UTF-8, falling back to Latin-1."""
    for encoding in ("utf-8", "latin-1"):
        try:
            return body.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("Body is not valid %s", encoding)
    return None


def extract_title(document: str, fallback: str) -> str:
    """Pull the first <title> out of an HTML document.

    Args:
        document: Decoded HTML text
        fallback: Returned when there is no title or it is blank

    Returns:
        The trimmed title with HTML entities decoded, or ``fallback``.
    """
    match = TITLE_PATTERN.search(document)
    if match is None:
        return fallback

    title = match.group(1).strip()
    if not title:
        return fallback

    if "&" in title:
        title = html.unescape(title).strip()
    return title or fallback


class TitleFetcher:
    """Fetches a page and returns its title, or a deterministic fallback."""

    def __init__(
        self,
        transport: NetworkTransport,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
    ) -> None:
        """Initialize the fetcher.

        Args:
            transport: HTTP layer making the single GET
            timeout: Seconds allowed for the whole request/response cycle
        """
        if timeout <= 0:
            raise ValueError(f"Fetch timeout must be positive, got {timeout}")
        self._transport = transport
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def fetch_title(self, url: str) -> str:
        """Fetch ``url`` and return its page title.

        Raises:
            FetchError: On timeout or any network-layer failure.
        """
        logger.info("Fetching title for: %s", url)
        fallback = fallback_title(url)

        try:
            response = await asyncio.wait_for(
                self._transport.request(url, self._timeout),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self._timeout:g}s", url=url) from e
        except OSError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e

        if not response.is_success:
            logger.debug("HTTP %d for %s, using fallback title", response.status_code, url)
            return fallback

        document = decode_body(response.body)
        if document is None:
            logger.debug("Could not decode body of %s, using fallback title", url)
            return fallback

        return extract_title(document, fallback)
