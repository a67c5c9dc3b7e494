"""httpx-backed NetworkTransport.

The client is created lazily on first request and reused, so repeated
conversions share connections. Call aclose() on shutdown.
"""

from __future__ import annotations

import logging
import ssl

import httpx

from linkcopy import __version__
from linkcopy.core.constants import DEFAULT_MAX_BODY_BYTES
from linkcopy.core.errors import FetchError
from linkcopy.core.types import FetchResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"linkcopy/{__version__}"


class HttpxTransport:
    """Makes the single GET behind each title fetch."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_ssl: bool = True,
        follow_redirects: bool = True,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            user_agent: User-Agent header value
            verify_ssl: Verify TLS certificates
            follow_redirects: Follow redirects within the one request
            max_body_bytes: Stop reading the body after this many bytes
            client: Pre-built client (tests pass one with a MockTransport)
        """
        self._user_agent = user_agent
        self._verify_ssl = verify_ssl
        self._follow_redirects = follow_redirects
        self._max_body_bytes = max_body_bytes
        self._client = client
        self._owns_client = client is None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        On Windows, if certifi's certificate bundle is missing/corrupted, falls
        back to the system certificate store.
        """
        if self._client is None:
            headers = {"User-Agent": self._user_agent, "Accept": "text/html,*/*;q=0.8"}
            try:
                self._client = httpx.AsyncClient(
                    headers=headers,
                    verify=self._verify_ssl,
                    follow_redirects=self._follow_redirects,
                )
            except FileNotFoundError:
                logger.warning(
                    "SSL certificate bundle not found (certifi issue?), "
                    "falling back to system certificates"
                )
                verify: bool | ssl.SSLContext = (
                    ssl.create_default_context() if self._verify_ssl else False
                )
                self._client = httpx.AsyncClient(
                    headers=headers,
                    verify=verify,
                    follow_redirects=self._follow_redirects,
                )
        return self._client

    async def request(self, url: str, timeout: float) -> FetchResponse:
        """GET ``url`` and return its (possibly truncated) body and status.

        Raises:
            FetchError: On timeout, connection, DNS or protocol failure.
        """
        client = await self._ensure_client()
        try:
            async with client.stream("GET", url, timeout=timeout) as response:
                body = await self._read_body(response)
                status_code = response.status_code
        except httpx.TimeoutException as e:
            raise FetchError(f"Request timed out after {timeout:g}s", url=url) from e
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e

        logger.debug("GET %s -> %d (%d bytes)", url, status_code, len(body))
        return FetchResponse(body=body, status_code=status_code)

    async def _read_body(self, response: httpx.Response) -> bytes:
        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
            size += len(chunk)
            if size >= self._max_body_bytes:
                logger.debug("Body exceeds %d bytes, truncating", self._max_body_bytes)
                break
        return b"".join(chunks)[: self._max_body_bytes]

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
